"""Wire models exchanged with the service registry."""

from pydantic import AnyUrl, BaseModel, ConfigDict, StrictBool, StrictStr


class Service(BaseModel):
    """Model representing one registered service instance.

    Records are produced by the registry only; the client never builds or
    changes them. Fields are strict so a record decodes with exactly the
    types the registry sent.
    """

    model_config = ConfigDict(frozen=True)

    service_type: StrictStr
    available: StrictBool
    healthcheck_endpoint: StrictStr
    is_accepted: StrictBool
    identifier: StrictStr
    ip: AnyUrl


class Identifier(BaseModel):
    """Body returned by the registration endpoint."""

    identifier: StrictStr


class Token(BaseModel):
    """Body returned by the token endpoint."""

    token: StrictStr
