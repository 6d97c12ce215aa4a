# =============================================================================
# API Request Models
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class SubmitIndexRequest(BaseModel):
    """
    Request body for POST /values.

    The index is accepted as text or as a JSON number and is forwarded
    verbatim to the cache and the notification channel.
    """

    index: int | str = Field(
        ...,
        description="Fibonacci index to compute (maximum 40)",
        examples=["5"],
    )

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"index": "5"}, {"index": 10}]},
    )
