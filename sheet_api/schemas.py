from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class GatewayRequest(BaseModel):
    """Inbound request parameters, multi-valued as they arrive on the query string."""

    parameters: Dict[str, List[str]] = {}

    @classmethod
    def from_items(cls, items) -> "GatewayRequest":
        parameters: Dict[str, List[str]] = {}
        for key, value in items:
            parameters.setdefault(key, []).append(value)
        return cls(parameters=parameters)

    def has(self, name: str) -> bool:
        return name in self.parameters

    def values(self, name: str) -> List[str]:
        return self.parameters.get(name, [])

    def first(self, name: str) -> Optional[str]:
        values = self.parameters.get(name)
        return values[0] if values else None

    @property
    def action(self) -> Optional[str]:
        return self.first("action")

    @property
    def method(self) -> str:
        return self.first("method") or "GET"

    @property
    def prefix(self) -> Optional[str]:
        return self.first("prefix")


class ApiParams(BaseModel):
    page: int = 0
    limit: int = 10
    filters: Dict[str, Any] = {}


class PdfTemplateRequest(BaseModel):
    template_id: str  # Docs ID or full document URL
    pdf_name: str = ""
    values: Dict[str, Any]
    truncate: bool = False


class PdfFileResponse(BaseModel):
    id: str
    name: str
    webViewLink: Optional[str] = None
