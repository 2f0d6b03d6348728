"""shiplog - structured changelog authoring and export.

Parse loosely formatted changelog text into releases, render releases
as Markdown, JSON or HTML, and compare saved snapshots of a changelog.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
