from pydantic import BaseModel, ConfigDict, Field


class DataQualityWarningDTO(BaseModel):
    """An observation row left out of every aggregate."""

    row_index: int = Field(description="Position of the rejected row in the snapshot")
    model_id: str
    code: str = Field(examples=["NEGATIVE_PRICE"])
    message: str = Field(examples=["price -5 is negative"])

    model_config = ConfigDict(protected_namespaces=())
