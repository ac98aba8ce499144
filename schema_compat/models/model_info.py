"""
Model identity passed to compat layers.
These models are intentionally separated to avoid circular imports.
"""

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    """Identity and capabilities of the model a schema is prepared for."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str = Field(..., description="Model identifier, used in diagnostics")
    provider: str = Field(default="", description="Provider name (e.g. 'openai.chat')")
    supports_structured_outputs: bool = Field(
        default=False,
        description="Whether the provider enforces the schema natively"
    )
