#!/usr/bin/env python3
"""Pydantic models for the records flowing through the release pipeline."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class CommitRecord(BaseModel):
    """A commit from the compare view."""
    
    sha: str = Field("", description="Commit SHA")
    message: str = Field("", description="Full commit message")
    
    model_config = {"extra": "ignore", "frozen": True}

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CommitRecord":
        commit = data.get("commit") or {}
        return cls(sha=data.get("sha") or "", message=commit.get("message") or "")


class PullRequestInfo(BaseModel):
    """The parts of a pull request the release body needs."""
    
    number: int = Field(..., description="Pull request number")
    title: str = Field("", description="Pull request title")
    html_url: Optional[str] = Field(None, description="GitHub URL for the PR")
    
    model_config = {"extra": "ignore"}


class ReleaseDraft(BaseModel):
    """A release ready to be printed or submitted."""
    
    tag_name: str = Field(..., min_length=1, description="Tag created for the release")
    name: str = Field(..., min_length=1, description="Display name, same as the tag")
    target_commitish: str = Field(..., min_length=1, description="Branch or commit the tag points at")
    body: str = Field("", description="Newline-joined release lines")
    
    model_config = {"extra": "forbid"}

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class ReleaseInfo(BaseModel):
    """A release as returned by GitHub after creation."""
    
    id: int
    tag_name: str
    name: Optional[str] = None
    html_url: str = ""
    draft: bool = False
    prerelease: bool = False
    target_commitish: Optional[str] = None
    
    model_config = {"extra": "ignore"}
