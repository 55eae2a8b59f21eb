"""Base exception shared by the amazon_util modules."""

from typing import Optional


class AmazonUtilError(Exception):
    """Base class for errors raised while building or using AWS clients.

    str(error) joins message, suggestion and details with blank lines so that
    plain log output keeps the hints; format() renders them for a console.
    """

    label = "AWS Error"

    def __init__(self, message: str, suggestion: Optional[str] = None, details: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        self.details = details
        super().__init__("\n\n".join(part for part in (message, suggestion, details) if part))

    def format(self) -> str:
        lines = [f"❌ {self.label}: {self.message}"]
        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}")
        if self.details:
            lines.append(f"   ℹ️  {self.details}")
        return "\n".join(lines)
