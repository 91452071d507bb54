"""Recipe model combining a transformation with where and how to publish it."""

from pydantic import BaseModel, ConfigDict, Field

from df_metrics.core.definition import Transformation
from df_metrics.models.runtime_config import RuntimeConfig
from df_metrics.storage.backend import StorageBackend


class MetricsRecipe(BaseModel):
    """Complete metrics definition loaded from YAML."""

    model_config = ConfigDict(protected_namespaces=())

    name: str = Field(description="Recipe name (required)")
    transformation: Transformation = Field(
        default_factory=Transformation, description="Stages to apply"
    )
    storage_backend: StorageBackend = Field(
        default=StorageBackend.STDOUT, description="Where results are published"
    )
    runtime: RuntimeConfig = Field(
        default_factory=RuntimeConfig, description="Runtime configuration"
    )

    @classmethod
    def from_dict(cls, data: dict) -> "MetricsRecipe":
        """Create MetricsRecipe from dictionary."""
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> "MetricsRecipe":
        """Load recipe from a YAML file."""
        from df_metrics.models.loader import load_recipe

        return load_recipe(path)
