from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Address(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    street: str = Field(..., min_length=1, max_length=255)
    number: str | None = Field(None, max_length=32)
    complement: str | None = Field(None, max_length=255)
    district: str | None = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    state: str = Field(..., min_length=1, max_length=64)
    zip_code: str | None = Field(None, max_length=16)


class Customer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cpf_cnpj: str
    name: str
    trade_name: str | None = None
    email: str | None = None
    birth_foundation_date: date | None = None
    state_registration: str | None = None
    phone_numbers: list[str] = []
    address: Address | None = None


class CustomerCreate(BaseModel):
    cpf_cnpj: str | None = Field(None, max_length=32)
    name: str | None = Field(None, max_length=255)
    trade_name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=320)
    birth_foundation_date: date | None = None
    state_registration: str | None = Field(None, max_length=64)
    phone_numbers: list[str] = Field(default_factory=list)
    address: Address | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_to_none(cls, v: str | None) -> str | None:
        """Blank emails are stored as NULL so they never collide on the unique index."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CustomerUpdate(BaseModel):
    cpf_cnpj: str | None = Field(None, max_length=32)
    name: str | None = Field(None, max_length=255)
    trade_name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=320)
    birth_foundation_date: date | None = None
    state_registration: str | None = Field(None, max_length=64)
    phone_numbers: list[str] | None = None
    address: Address | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v
