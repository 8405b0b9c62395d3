"""
Model records and the model registry.

The registry owns every trained Model and the active-model pointer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from mlstudio.errors import DuplicateIdError, UnknownModelError
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)


class ModelStatus(str, Enum):
    """Lifecycle status of a model."""

    TRAINING = "training"
    ACTIVE = "active"
    ARCHIVED = "archived"


@dataclass
class Model:
    """
    A trained model.

    Only ``status`` changes after creation.

    Attributes:
        id: Registry key.
        name: Display name.
        description: Free text.
        algorithm: Algorithm name, e.g. "Random Forest".
        created_at: Creation timestamp.
        dataset_id: Dataset the model was trained on.
        parameters: Hyperparameters.
        version: Model version string.
        status: Lifecycle status.
    """

    id: str
    name: str
    description: str
    algorithm: str
    created_at: datetime
    dataset_id: str
    parameters: dict[str, Any] = field(default_factory=dict)
    version: str = "1.0"
    status: ModelStatus = ModelStatus.ACTIVE


class ModelRegistry:
    """In-memory registry of models with a single active selection."""

    def __init__(self) -> None:
        self._models: dict[str, Model] = {}
        self._active_id: str | None = None

    def register(self, model: Model) -> Model:
        """
        Add a model.

        Raises:
            DuplicateIdError: If a model with the same id exists.
        """
        if model.id in self._models:
            raise DuplicateIdError("Model", model.id)
        self._models[model.id] = model
        log.info("Model registered", model_id=model.id, algorithm=model.algorithm)
        return model

    def get(self, model_id: str) -> Model:
        """Return a model by id or raise UnknownModelError."""
        try:
            return self._models[model_id]
        except KeyError:
            raise UnknownModelError(model_id) from None

    def activate(self, model_id: str) -> Model:
        """
        Make a model the active one.

        An archived model is returned to active status.

        Raises:
            UnknownModelError: If the id is not registered.
        """
        model = self.get(model_id)
        if model.status == ModelStatus.ARCHIVED:
            model.status = ModelStatus.ACTIVE
        self._active_id = model_id
        log.info("Model activated", model_id=model_id)
        return model

    def archive(self, model_id: str) -> Model:
        """
        Archive a model, clearing the active pointer if it pointed there.

        Raises:
            UnknownModelError: If the id is not registered.
        """
        model = self.get(model_id)
        model.status = ModelStatus.ARCHIVED
        if self._active_id == model_id:
            self._active_id = None
        log.info("Model archived", model_id=model_id)
        return model

    def list(self) -> list[Model]:
        """All models in registration order."""
        return list(self._models.values())

    def active(self) -> Model | None:
        """The active model, or None."""
        if self._active_id is None:
            return None
        return self._models[self._active_id]

    def __len__(self) -> int:
        return len(self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models
