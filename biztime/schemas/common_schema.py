from pydantic import BaseModel


class CodeRef(BaseModel):
    code: str


class DeletedResponse(BaseModel):
    status: str = "deleted"
