import pytest
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter

ITEM = {"image_id": "img_1", "storage_key": "img_1.png", "content_type": "image/png"}
IS_NEW = "attribute_not_exists(image_id)"


def test_table_name_is_required(monkeypatch):
    monkeypatch.delenv("IMAGE_METADATA_TABLE_NAME")

    with pytest.raises(RuntimeError, match="IMAGE_METADATA_TABLE_NAME"):
        DynamoDBAdapter()


class TestTableCalls:
    def test_put_then_get(self, dynamodb_table):
        adapter = DynamoDBAdapter()

        adapter.put_item(item=ITEM)

        assert adapter.get_item(key={"image_id": "img_1"}, consistent_read=True)["Item"] == ITEM

    def test_get_missing_has_no_item(self, dynamodb_table):
        assert "Item" not in DynamoDBAdapter().get_item(key={"image_id": "missing"})

    def test_condition_expression_is_forwarded(self, dynamodb_table):
        adapter = DynamoDBAdapter()
        adapter.put_item(item=ITEM, condition_expression=IS_NEW)

        with pytest.raises(ClientError) as exc:
            adapter.put_item(item=ITEM, condition_expression=IS_NEW)

        assert exc.value.response["Error"]["Code"] == "ConditionalCheckFailedException"

    def test_unconditional_put_overwrites(self, dynamodb_table):
        adapter = DynamoDBAdapter()
        adapter.put_item(item=ITEM)
        adapter.put_item(item={**ITEM, "content_type": "image/gif"})

        assert adapter.get_item(key={"image_id": "img_1"})["Item"]["content_type"] == "image/gif"

    def test_delete(self, dynamodb_table):
        adapter = DynamoDBAdapter()
        adapter.put_item(item=ITEM)

        adapter.delete_item(key={"image_id": "img_1"})
        adapter.delete_item(key={"image_id": "never-existed"})

        assert "Item" not in adapter.get_item(key={"image_id": "img_1"})

    @pytest.mark.parametrize("method", ["get_item", "delete_item"])
    def test_client_errors_propagate(self, monkeypatch, dynamodb_table, method):
        adapter = DynamoDBAdapter()

        def fail(**_):
            raise ClientError({"Error": {"Code": "InternalServerError"}}, method)

        monkeypatch.setattr(adapter.table, method, fail)

        with pytest.raises(ClientError):
            getattr(adapter, method)(key={"image_id": "img_1"})
