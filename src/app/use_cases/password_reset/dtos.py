from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation message returned by the password reset steps"""

    message: str
