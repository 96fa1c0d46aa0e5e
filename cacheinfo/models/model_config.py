"""Configuration models for the key grammar."""

from pydantic import BaseModel, Field, model_validator

from cacheinfo.consts import DEFAULT_POOL_NAMESPACE, KEY_PATH_SEPARATOR, KEY_SEPARATOR
from cacheinfo.models.model_keys import ItemNamespace


class KeyGrammarConfig(BaseModel):
    """Constants of the string key grammar shared by codec and aggregator."""

    separator: str = Field(default=KEY_SEPARATOR, min_length=1)
    path_separator: str = Field(default=KEY_PATH_SEPARATOR, min_length=1)
    data_namespace: str = Field(default=ItemNamespace.DATA.value, min_length=1)
    lock_namespace: str = Field(default=ItemNamespace.LOCK.value, min_length=1)
    default_pool_namespace: str = Field(default=DEFAULT_POOL_NAMESPACE, min_length=1)

    @model_validator(mode="after")
    def validate_namespaces(self) -> "KeyGrammarConfig":
        """Data and lock entries must be distinguishable."""
        if self.data_namespace == self.lock_namespace:
            msg = f"data and lock namespaces must differ, both are '{self.data_namespace}'"
            raise ValueError(msg)
        return self

    @property
    def item_namespaces(self) -> tuple[str, str]:
        return (self.data_namespace, self.lock_namespace)
