"""REST API error response models.

Every non-2xx response uses ErrorResponse. Routes reference these models in
their ``responses`` so the OpenAPI schema documents the error shape.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error inside a validation failure."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "search",
                "message": "Must be at most 100 characters",
                "code": "TOO_LONG",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Not found:
            {"detail": "PhoneModel with identifier 'x' not found", "code": "NOT_FOUND"}

        Store outage:
            {"detail": "Could not read price observations",
             "code": "OBSERVATION_STORE_UNAVAILABLE"}
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "PhoneModel with identifier 'm-1' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Could not read price observations",
                    "code": "OBSERVATION_STORE_UNAVAILABLE",
                },
                {
                    "detail": "Invalid request parameters",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "limit",
                            "message": "Input should be less than or equal to 100",
                            "code": "less_than_equal",
                        }
                    ],
                },
            ]
        }
    )
