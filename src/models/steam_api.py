"""
Steam UpToDateCheck response schema

Pydantic models for:
GET https://api.steampowered.com/ISteamApps/UpToDateCheck/v0001/?appid=730&version=<PatchVersion>

Example body:
    {
        "response": {
            "success": true,
            "up_to_date": false,
            "version_is_listable": false,
            "required_version": 14051,
            "message": "Your server is out of date, please upgrade"
        }
    }
"""

from typing import Optional
from pydantic import BaseModel, Field


class UpToDateCheck(BaseModel):
    """Inner "response" object"""
    success: bool = Field(False, description="Steam processed the request")
    up_to_date: bool = Field(True, description="Reported version is current")
    version_is_listable: bool = Field(False, description="Servers on this version are listed")
    required_version: Optional[int] = Field(None, description="Latest required PatchVersion (null or absent = 0)")
    message: Optional[str] = Field(None, description="Human readable status")


class UpToDateCheckResponse(BaseModel):
    """Top-level envelope"""
    response: Optional[UpToDateCheck] = None

    @property
    def update_available(self) -> bool:
        return self.response is not None and self.response.success and not self.response.up_to_date

    @property
    def required_version(self) -> int:
        if self.response is None:
            return 0
        return self.response.required_version or 0
