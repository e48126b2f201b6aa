from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ServiceAccountConnection(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = None
    clientEmail: Optional[str] = None
    privateKey: Optional[str] = None
    projectId: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> Optional[str]:
        # display label only, any JSON scalar is accepted
        return None if value is None else str(value)

    @property
    def is_complete(self) -> bool:
        return bool(self.clientEmail and self.privateKey and self.projectId)


class SpreadsheetRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    spreadsheetId: Optional[str] = None
    connection: Optional[ServiceAccountConnection] = None


class SheetRequest(SpreadsheetRequest):
    sheetName: Optional[str] = None
    range: Optional[str] = None

    @model_validator(mode="after")
    def _blank_range(self) -> "SheetRequest":
        if self.range is not None and not self.range.strip():
            self.range = None
        return self


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str
    timestamp: str


class SheetNamesResponse(BaseModel):
    success: bool = True
    sheetNames: List[str]
    count: int
    spreadsheetId: str


class HeadersResponse(BaseModel):
    success: bool = True
    headers: List[str]
    count: int
    sheetName: str
    spreadsheetId: str


class DataResponse(BaseModel):
    success: bool = True
    # Rows keep the upstream shape: trailing empty cells are omitted, so rows
    # may differ in length.
    data: List[List[Any]]
    rowCount: int
    sheetName: str
    spreadsheetId: str


class AccessResponse(BaseModel):
    success: bool = True
    hasAccess: bool
    spreadsheetId: Optional[str] = None
    spreadsheetTitle: Optional[str] = None
    error: Optional[str] = None
    code: Optional[Union[int, str]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: Optional[Union[int, str]] = None
