"""
Integration-style tests for get image Lambda handler.
Uses the real ImageService with moto-backed DynamoDB and S3.
"""

import json
from unittest.mock import patch

from core.models.errors import DynamoDBError
from handlers.get_image.handler import handler


def emitted_metric_names(stdout: str) -> set[str]:
    """Metric names in the CloudWatch EMF documents printed by `log_metrics`."""
    names = set()
    for line in stdout.splitlines():
        if '"_aws"' not in line:
            continue
        for directive in json.loads(line)["_aws"]["CloudWatchMetrics"]:
            names.update(metric["Name"] for metric in directive["Metrics"])
    return names


class TestGetImageHandler:
    def test_get_image_success(self, stored_image, lambda_context, get_image_event) -> None:
        response = handler(get_image_event, lambda_context)

        assert response["statusCode"] == 200

        body = json.loads(response["body"])
        assert body["image_id"] == stored_image["image_id"]
        assert body["content_type"] == "image/png"
        assert body["image_url"].endswith(f"/{stored_image['storage_key']}")

    def test_get_image_not_found(self, aws_stores, lambda_context, get_image_event) -> None:
        response = handler(get_image_event, lambda_context)

        assert response["statusCode"] == 404
        body = json.loads(response["body"])
        assert body["error"] == "NOT_FOUND"
        assert get_image_event["pathParameters"]["image_id"] in body["message"]

    def test_not_found_emits_metric(
        self, aws_stores, lambda_context, get_image_event, capsys
    ) -> None:
        handler(get_image_event, lambda_context)

        assert "ImageNotFound" in emitted_metric_names(capsys.readouterr().out)

    def test_found_image_emits_no_not_found_metric(
        self, stored_image, lambda_context, get_image_event, capsys
    ) -> None:
        handler(get_image_event, lambda_context)

        assert "ImageNotFound" not in emitted_metric_names(capsys.readouterr().out)

    def test_cached_view_survives_record_removal(
        self, stored_image, dynamodb_table, lambda_context, get_image_event
    ) -> None:
        assert handler(get_image_event, lambda_context)["statusCode"] == 200

        dynamodb_table.delete_item(Key={"image_id": stored_image["image_id"]})

        assert handler(get_image_event, lambda_context)["statusCode"] == 200

    def test_invalid_image_id(self, lambda_context) -> None:
        event = {"httpMethod": "GET", "pathParameters": {"image_id": "img_abc123"}}

        response = handler(event, lambda_context)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["details"]["errors"][0]["message"] == "Must be a valid image identifier"

    def test_missing_path_parameters(self, lambda_context) -> None:
        response = handler({"httpMethod": "GET", "pathParameters": None}, lambda_context)

        assert response["statusCode"] == 400

    def test_metadata_store_failure(self, aws_stores, lambda_context, get_image_event) -> None:
        with patch(
            "core.infrastructure.aws.dynamodb_metadata.DynamoDBMetadata.find_record",
            side_effect=DynamoDBError(
                message="Unable to retrieve image metadata",
                error_code="METADATA_FETCH_FAILED",
            ),
        ):
            response = handler(get_image_event, lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error"] == "METADATA_FETCH_FAILED"

    def test_options_preflight(self, lambda_context) -> None:
        response = handler({"httpMethod": "OPTIONS"}, lambda_context)

        assert response["statusCode"] == 204
