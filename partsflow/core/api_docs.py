from partsflow.schemas.common import ErrorOut


_ERROR_EXAMPLES: dict[int, tuple[str, str, list[dict] | None]] = {
    400: (
        "validation_error",
        "Invalid data",
        [{"field": "partNumber", "message": "Field required", "type": "missing"}],
    ),
    404: ("not_found", "Resource not found", None),
    500: ("internal_error", "Internal server error", None),
}


def error_responses(*status_codes: int) -> dict[int, dict]:
    responses: dict[int, dict] = {}
    for status_code in status_codes:
        code, message, details = _ERROR_EXAMPLES.get(
            status_code, ("http_error", "HTTP error", None)
        )
        responses[status_code] = {
            "model": ErrorOut,
            "description": message,
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": code,
                            "message": message,
                            "request_id": "request-id",
                            "path": "/api/parts",
                            "details": details,
                        }
                    }
                }
            },
        }
    return responses
