"""Exceptions raised by the engine and its registries."""


class MLStudioError(Exception):
    """Base class for all engine errors."""


class DuplicateIdError(MLStudioError):
    """An object with the same id is already registered."""

    def __init__(self, kind: str, object_id: str) -> None:
        self.kind = kind
        self.object_id = object_id
        super().__init__(f"{kind} with id '{object_id}' is already registered")


class UnknownDatasetError(MLStudioError):
    """No dataset with the requested id."""

    def __init__(self, dataset_id: str) -> None:
        self.dataset_id = dataset_id
        super().__init__(f"Unknown dataset '{dataset_id}'")


class NoActiveDatasetError(MLStudioError):
    """An operation needs an active dataset but none is selected."""

    def __init__(self) -> None:
        super().__init__("No active dataset selected")


class UnknownModelError(MLStudioError):
    """No model with the requested id."""

    def __init__(self, model_id: str) -> None:
        self.model_id = model_id
        super().__init__(f"Unknown model '{model_id}'")


class NoActiveModelError(MLStudioError):
    """A prediction was requested without an active model."""

    def __init__(self) -> None:
        super().__init__("No active model selected")


class TrainingAlreadyInProgressError(MLStudioError):
    """A training run was started while another one is still running."""

    def __init__(self) -> None:
        super().__init__("A training run is already in progress")


class UnknownFeatureError(MLStudioError):
    """The requested feature is not declared on the dataset."""

    def __init__(self, feature_name: str, dataset_id: str) -> None:
        self.feature_name = feature_name
        self.dataset_id = dataset_id
        super().__init__(
            f"Feature '{feature_name}' not found in dataset '{dataset_id}'"
        )


class DegenerateDomainError(MLStudioError, ValueError):
    """A scale or normalization was requested over a zero-width domain."""

    def __init__(self, domain_min: float, domain_max: float) -> None:
        self.domain_min = domain_min
        self.domain_max = domain_max
        super().__init__(
            f"Degenerate domain [{domain_min}, {domain_max}]: width must be non-zero"
        )
