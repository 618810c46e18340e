"""Request models shared by the DataZone service wrapper."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class FormInput(BaseModel):
    """A metadata form attached to an asset on create or revision."""

    form_name: str
    type_identifier: Optional[str] = None
    type_revision: Optional[str] = None
    content: Optional[str] = None  # JSON document matching the form type

    def to_request(self) -> Dict[str, Any]:
        """Render the ``formsInput`` entry expected by the DataZone API."""
        request: Dict[str, Any] = {"formName": self.form_name}
        if self.type_identifier:
            request["typeIdentifier"] = self.type_identifier
        if self.type_revision:
            request["typeRevision"] = self.type_revision
        if self.content is not None:
            request["content"] = self.content
        return request
