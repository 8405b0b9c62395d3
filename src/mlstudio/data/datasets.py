"""
Dataset records and the dataset registry.

The registry owns every Dataset and tracks which one is active.
Downstream components only read from it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import pandas as pd

from mlstudio.errors import DuplicateIdError, NoActiveDatasetError, UnknownDatasetError
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)


class FeatureType(str, Enum):
    """Kind of values a feature holds."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


@dataclass(frozen=True)
class Feature:
    """
    Feature metadata.

    Attributes:
        name: Column name in the dataset rows.
        type: Numeric or categorical.
        importance: Relevance score used for ranking only.
    """

    name: str
    type: FeatureType
    importance: float = 0.0


@dataclass(frozen=True)
class Dataset:
    """
    An immutable, already validated dataset.

    Attributes:
        id: Registry key.
        name: Display name.
        description: Free text.
        created_at: Creation timestamp.
        row_count: Number of rows.
        column_count: Number of columns.
        features: Ordered feature metadata.
        rows: Raw records, one row per record.
        target_column: Name of the label column.
    """

    id: str
    name: str
    description: str
    created_at: datetime
    row_count: int
    column_count: int
    features: tuple[Feature, ...]
    rows: pd.DataFrame = field(repr=False, compare=False)
    target_column: str

    @classmethod
    def from_frame(
        cls,
        dataset_id: str,
        name: str,
        rows: pd.DataFrame,
        features: list[Feature],
        target_column: str,
        description: str = "",
        created_at: datetime | None = None,
    ) -> "Dataset":
        """Build a dataset whose counts are taken from the frame's shape."""
        return cls(
            id=dataset_id,
            name=name,
            description=description,
            created_at=created_at or datetime.now(),
            row_count=len(rows),
            column_count=len(rows.columns),
            features=tuple(features),
            rows=rows,
            target_column=target_column,
        )

    def feature(self, name: str) -> Feature | None:
        """Look up a feature by name."""
        for feature in self.features:
            if feature.name == name:
                return feature
        return None

    @property
    def feature_names(self) -> list[str]:
        """Feature names in declaration order."""
        return [f.name for f in self.features]


class DatasetRegistry:
    """
    In-memory registry of datasets with a single active selection.

    Datasets are kept in registration order.
    """

    def __init__(self) -> None:
        self._datasets: dict[str, Dataset] = {}
        self._active_id: str | None = None

    def register(self, dataset: Dataset) -> Dataset:
        """
        Add a dataset.

        Raises:
            DuplicateIdError: If a dataset with the same id exists.
        """
        if dataset.id in self._datasets:
            raise DuplicateIdError("Dataset", dataset.id)
        self._datasets[dataset.id] = dataset
        log.info(
            "Dataset registered",
            dataset_id=dataset.id,
            rows=dataset.row_count,
            columns=dataset.column_count,
        )
        return dataset

    def select(self, dataset_id: str) -> Dataset:
        """
        Make a dataset the active one.

        Raises:
            UnknownDatasetError: If the id is not registered.
        """
        dataset = self.get(dataset_id)
        self._active_id = dataset_id
        log.info("Dataset selected", dataset_id=dataset_id)
        return dataset

    def get(self, dataset_id: str) -> Dataset:
        """Return a dataset by id or raise UnknownDatasetError."""
        try:
            return self._datasets[dataset_id]
        except KeyError:
            raise UnknownDatasetError(dataset_id) from None

    def list_all(self) -> list[Dataset]:
        """All datasets in registration order."""
        return list(self._datasets.values())

    @property
    def has_active(self) -> bool:
        """Whether a dataset is selected."""
        return self._active_id is not None

    def active(self) -> Dataset:
        """
        Return the active dataset.

        Raises:
            NoActiveDatasetError: If nothing is selected.
        """
        if self._active_id is None:
            raise NoActiveDatasetError()
        return self._datasets[self._active_id]

    def active_features(self) -> list[Feature]:
        """Feature list of the active dataset."""
        return list(self.active().features)

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return dataset_id in self._datasets
