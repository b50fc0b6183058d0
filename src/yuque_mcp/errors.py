"""Errors raised by the Yuque client and workflows.

Every error here is caught at the tool boundary and rendered as text.
"""

import json
from typing import Any, List, Optional


class YuqueError(Exception):
    """Base class for all Yuque tool errors."""


class ConfigMissingError(YuqueError):
    """One or more required configuration values are empty."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing required configuration: " + ", ".join(self.missing)
            + ". Set the defaults in the environment or pass them explicitly."
        )


class RemoteError(YuqueError):
    """The Yuque API answered with a non-2xx status, or could not be reached."""

    def __init__(
        self,
        status_code: Optional[int] = None,
        payload: Any = None,
        message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.payload = payload
        self.message = message
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.status_code is None:
            return self.message or "request failed"
        if isinstance(self.payload, str):
            body = self.payload
        else:
            body = json.dumps(self.payload, ensure_ascii=False)
        return f"status {self.status_code}, response: {body}"


class GroupCreationError(YuqueError):
    """The group append succeeded but returned no node uuid."""

    def __init__(self, group_name: str):
        self.group_name = group_name
        super().__init__(f"Group '{group_name}' was not created: no UUID in the response.")


class DocumentCreationError(YuqueError):
    """The document create call succeeded but returned no id."""

    def __init__(self, doc_title: str):
        self.doc_title = doc_title
        super().__init__(f"Document '{doc_title}' was not created: no ID in the response.")


class PartialAttachmentError(YuqueError):
    """The document exists but could not be linked into its group."""

    def __init__(self, doc_id: Any, doc_title: str, group_name: str, cause: Exception):
        self.doc_id = doc_id
        self.doc_title = doc_title
        self.group_name = group_name
        self.cause = cause
        super().__init__(
            f"Document '{doc_title}' was created (ID: {doc_id}) but could not be "
            f"attached to group '{group_name}': {cause}. "
            "It is not linked from the table of contents."
        )
