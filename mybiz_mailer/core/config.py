from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("mybiz-mailer", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Server
    server_host: str = Field("0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(5000, alias="SERVER_PORT")

    # CORS allowed origins (comma-separated list, "*" allows any origin)
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    # Mail account
    user_email: str | None = Field(default=None, alias="USER_EMAIL")
    user_email_pass: str | None = Field(default=None, alias="USER_EMAIL_PASS")
    mail_from_name: str = Field("MYBIZ - One App. Every Business", alias="MAIL_FROM_NAME")

    # Mail transport: "smtp" for real delivery, "memory" to keep messages in-process
    mail_transport: Literal["smtp", "memory"] = Field("smtp", alias="MAIL_TRANSPORT")
    smtp_host: str = Field("smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(465, alias="SMTP_PORT")
    smtp_use_ssl: bool = Field(True, alias="SMTP_USE_SSL")  # False = plain connect + STARTTLS
    smtp_timeout: float = Field(30.0, alias="SMTP_TIMEOUT")

    # Routes under /api/v1/user
    otp_path: str = Field("send-otp", alias="OTP_PATH")
    bill_path: str = Field("send-bill", alias="BILL_PATH")

    # Which body shape the bill endpoint accepts ("auto" detects per request)
    bill_request_form: Literal["auto", "rich", "minimal"] = Field("auto", alias="BILL_REQUEST_FORM")

    # Returning the OTP to the caller is a debugging aid. Unset = on everywhere except production.
    expose_otp_in_response: bool | None = Field(default=None, alias="EXPOSE_OTP_IN_RESPONSE")

    # Email content
    brand_name: str = Field("MYBIZ", alias="BRAND_NAME")
    brand_tagline: str = Field("Your Business Managing Partner", alias="BRAND_TAGLINE")
    currency_symbol: str = Field("₹", alias="CURRENCY_SYMBOL")
    otp_validity_minutes: int = Field(10, alias="OTP_VALIDITY_MINUTES")
    due_date_offset_days: int = Field(7, alias="DUE_DATE_OFFSET_DAYS")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def otp_exposed(self) -> bool:
        if self.expose_otp_in_response is not None:
            return self.expose_otp_in_response
        return self.app_env.lower() != "production"

settings = Settings()
