import base64
import json
from typing import Dict, Optional

import pytest
from mangum import Mangum

from documents_api.main import create_app
from tests.fixtures.forms import build_multipart_body, multipart_content_type

TEST_PDF_CONTENT = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n%%EOF"


class FakeLambdaContext:
    function_name = "documents-api"
    aws_request_id = "00000000-0000-0000-0000-000000000000"


def api_gateway_event(
    method: str,
    query: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[str] = None,
    is_base64_encoded: bool = False,
    path: str = "/documents",
) -> dict:
    """An API Gateway REST (v1) proxy event as Lambda receives it."""
    headers = {"Host": "api.example.com", "X-Forwarded-Proto": "https", **(headers or {})}
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": headers,
        "multiValueHeaders": {name: [value] for name, value in headers.items()},
        "queryStringParameters": query,
        "multiValueQueryStringParameters": {name: [value] for name, value in (query or {}).items()} or None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "resourcePath": path,
            "httpMethod": method,
            "path": f"/prod{path}",
            "stage": "prod",
            "identity": {"sourceIp": "203.0.113.10"},
        },
        "body": body,
        "isBase64Encoded": is_base64_encoded,
    }


@pytest.fixture
def handler(mocked_aws, settings) -> Mangum:
    return Mangum(create_app(settings=settings, s3_client=mocked_aws), lifespan="off")


def test__preflight_event(handler: Mangum):
    result = handler(api_gateway_event("OPTIONS"), FakeLambdaContext())

    assert result["statusCode"] == 200
    assert result["isBase64Encoded"] is False
    assert json.loads(result["body"]) == {"message": "Preflight request successful"}
    assert result["headers"]["access-control-allow-origin"] == "*"


def test__base64_upload_then_binary_download(handler: Mangum):
    body = build_multipart_body(
        fields={"documentValueCode": "INV001"},
        files=[("file", "report.pdf", "application/pdf", TEST_PDF_CONTENT)],
    )
    upload_event = api_gateway_event(
        "POST",
        query={"action": "uploadFile"},
        headers={"Content-Type": multipart_content_type()},
        body=base64.b64encode(body).decode("ascii"),
        is_base64_encoded=True,
    )

    uploaded = handler(upload_event, FakeLambdaContext())

    assert uploaded["statusCode"] == 200
    key = json.loads(uploaded["body"])["key"]

    downloaded = handler(
        api_gateway_event("GET", query={"action": "downloadFile", "key": key}),
        FakeLambdaContext(),
    )

    assert downloaded["statusCode"] == 200
    assert downloaded["isBase64Encoded"] is True
    assert base64.b64decode(downloaded["body"]) == TEST_PDF_CONTENT
    assert downloaded["headers"]["x-document-value-code"] == "INV001"


def test__lambda_module_exposes_handler(aws_credentials):
    from documents_api import lambda_handler

    assert isinstance(lambda_handler.handler, Mangum)
    assert lambda_handler.lambda_handler is lambda_handler.handler


def test__any_resource_path_is_dispatched(handler: Mangum):
    result = handler(
        api_gateway_event("GET", query={"action": "listDocuments"}, path="/manageDoc"),
        FakeLambdaContext(),
    )

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"documents": []}
    assert result["headers"]["access-control-allow-origin"] == "*"
