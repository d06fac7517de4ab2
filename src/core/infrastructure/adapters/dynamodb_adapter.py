"""boto3 access to the image metadata table."""

from typing import Any, Protocol

import boto3

from core.utils.constants import ENV_IMAGE_METADATA_TABLE_NAME
from core.utils.settings import boto3_options, required_env


class DynamoDBAdapterProtocol(Protocol):
    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any], consistent_read: bool = False) -> dict[str, Any]: ...

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Table calls with snake_case arguments.

    boto3 errors propagate unchanged; `DynamoDBMetadata` translates them.
    """

    def __init__(self) -> None:
        table_name = required_env(ENV_IMAGE_METADATA_TABLE_NAME)
        self.table = boto3.resource("dynamodb", **boto3_options()).Table(table_name)

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        if condition_expression is None:
            return self.table.put_item(Item=item)
        return self.table.put_item(Item=item, ConditionExpression=condition_expression)

    def get_item(self, *, key: dict[str, Any], consistent_read: bool = False) -> dict[str, Any]:
        return self.table.get_item(Key=key, ConsistentRead=consistent_read)

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        return self.table.delete_item(Key=key)
