"""Reply to a contact enquiry."""

from pydantic import BaseModel, Field


class EnquiryReply(BaseModel):
    reply_message: str = Field(..., description="Text of the reply sent to the customer")
    subject: str = Field("", description="Optional subject line")
