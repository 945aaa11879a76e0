"""Google Workspace directory integration."""

from shared_kernel.integrations.google.client import GoogleDirectoryClient
from shared_kernel.integrations.google.protocols import (
    DirectoryService,
    ProgressCallback,
)

__all__ = ["DirectoryService", "GoogleDirectoryClient", "ProgressCallback"]
