import lambda_handler


def test_strip_base_path_http_api_event():
    event = {
        "rawPath": "/default/alifarm-api/health",
        "requestContext": {"http": {"path": "/default/alifarm-api/health"}},
    }
    event = lambda_handler.strip_base_path(event, "/default/alifarm-api")

    assert event["rawPath"] == "/health"
    assert event["requestContext"]["http"]["path"] == "/health"


def test_strip_base_path_root():
    event = lambda_handler.strip_base_path({"path": "/default/alifarm-api"}, "/default/alifarm-api")
    assert event["path"] == "/"


def test_other_paths_untouched():
    event = lambda_handler.strip_base_path({"rawPath": "/health"}, "/default/alifarm-api")
    assert event["rawPath"] == "/health"
