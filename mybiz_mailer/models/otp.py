from pydantic import BaseModel, ConfigDict, Field

class OtpRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str | None = Field(default=None)


class OtpDispatchResult(BaseModel):
    email: str
    otp: str | None = None  # Only populated when the code may be returned to the caller
