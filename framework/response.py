from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

class ResponseModel(BaseModel):
    """Envelope returned by every endpoint: {"code", "message", "data"}."""
    code: int = 200
    message: str = "success"
    data: Optional[Any] = None

    @staticmethod
    def success(data: Any = None):
        # Views carry Decimal balances; encode them here so handlers can return plain dicts
        return {"code": 200, "message": "success", "data": jsonable_encoder(data)}

    @staticmethod
    def fail(code: int = 400, message: str = "error", data: Any = None):
        return {"code": code, "message": message, "data": data}
