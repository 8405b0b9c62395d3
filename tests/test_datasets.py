"""Tests for datasets, the dataset registry and the sample data."""

import numpy as np
import pandera.errors
import pytest

from mlstudio.data import (
    LOAN_FEATURES,
    SAMPLE_DATASET_ID,
    Dataset,
    DatasetRegistry,
    FeatureType,
    build_sample_dataset,
    generate_loan_data,
)
from mlstudio.errors import DuplicateIdError, NoActiveDatasetError, UnknownDatasetError
from mlstudio.schemas import LoanApplicationSchema


class TestDataset:
    """Tests for the Dataset record."""

    def test_from_frame_counts(self, sample_dataset: Dataset) -> None:
        """Test that row and column counts follow the frame shape."""
        assert sample_dataset.row_count == 6
        assert sample_dataset.column_count == 6
        assert sample_dataset.target_column == "approved"

    def test_feature_lookup(self, sample_dataset: Dataset) -> None:
        """Test feature lookup by name."""
        feature = sample_dataset.feature("home_ownership")
        assert feature is not None
        assert feature.type == FeatureType.CATEGORICAL
        assert sample_dataset.feature("missing") is None

    def test_feature_names_keep_order(self, sample_dataset: Dataset) -> None:
        """Test that feature names follow declaration order."""
        assert sample_dataset.feature_names == [
            "credit_score",
            "income",
            "debt_to_income",
            "home_ownership",
        ]


class TestDatasetRegistry:
    """Tests for DatasetRegistry."""

    def test_no_active_initially(self) -> None:
        """Test that a new registry has no active dataset."""
        registry = DatasetRegistry()
        assert not registry.has_active
        with pytest.raises(NoActiveDatasetError):
            registry.active()
        with pytest.raises(NoActiveDatasetError):
            registry.active_features()

    def test_register_and_select(self, sample_dataset: Dataset) -> None:
        """Test registering then selecting a dataset."""
        registry = DatasetRegistry()
        registry.register(sample_dataset)
        assert sample_dataset.id in registry
        assert not registry.has_active

        registry.select(sample_dataset.id)
        assert registry.active() is sample_dataset
        assert [f.name for f in registry.active_features()] == (
            sample_dataset.feature_names
        )

    def test_duplicate_id(
        self, dataset_registry: DatasetRegistry, sample_dataset: Dataset
    ) -> None:
        """Test that registering the same id twice fails."""
        with pytest.raises(DuplicateIdError, match="loans-small"):
            dataset_registry.register(sample_dataset)
        assert len(dataset_registry) == 1

    def test_select_unknown(self, dataset_registry: DatasetRegistry) -> None:
        """Test that selecting an unknown id fails and keeps the selection."""
        with pytest.raises(UnknownDatasetError):
            dataset_registry.select("nope")
        assert dataset_registry.active().id == "loans-small"

    def test_list_all_in_registration_order(self) -> None:
        """Test that list_all preserves registration order."""
        registry = DatasetRegistry()
        ids = ["b", "a", "c"]
        for dataset_id in ids:
            registry.register(
                Dataset.from_frame(
                    dataset_id=dataset_id,
                    name=dataset_id,
                    rows=generate_loan_data(3, np.random.default_rng(0)),
                    features=list(LOAN_FEATURES),
                    target_column="approved",
                )
            )
        assert [d.id for d in registry.list_all()] == ids


class TestSampleData:
    """Tests for the built-in loan sample."""

    def test_generated_rows_match_schema(self) -> None:
        """Test value ranges of generated applications."""
        frame = generate_loan_data(500, np.random.default_rng(1))

        LoanApplicationSchema.validate(frame)
        assert len(frame) == 500
        assert frame["age"].between(25, 64).all()
        assert frame["income"].between(30_000, 179_999).all()
        assert frame["loan_amount"].between(5_000, 54_999).all()
        assert frame["credit_score"].between(450, 799).all()
        assert frame["employment_length"].between(1, 15).all()
        assert frame["debt_to_income"].between(0.1, 0.6).all()

    def test_seeded_generation_is_reproducible(self) -> None:
        """Test that equal seeds give equal data."""
        first = generate_loan_data(50, np.random.default_rng(5))
        second = generate_loan_data(50, np.random.default_rng(5))
        assert first.equals(second)

    def test_high_risk_applicants_approved_less(self) -> None:
        """Test that defaults lower the approval rate."""
        frame = generate_loan_data(4000, np.random.default_rng(2))
        defaulted = frame[frame["has_default"] == "yes"]["approved"].mean()
        safe = frame[
            (frame["has_default"] == "no")
            & (frame["credit_score"] >= 600)
            & (frame["debt_to_income"] <= 0.45)
            & (frame["loan_amount"] <= 30_000)
        ]["approved"].mean()
        assert defaulted < 0.4
        assert safe > 0.7

    def test_sample_dataset_metadata(self) -> None:
        """Test the default dataset's id, features and shape."""
        dataset = build_sample_dataset(n_rows=100, seed=1)

        assert dataset.id == SAMPLE_DATASET_ID
        assert dataset.row_count == 100
        assert dataset.column_count == 12
        assert len(dataset.features) == 10
        assert dataset.feature("credit_score").importance == 0.3

    def test_schema_rejects_bad_rows(self) -> None:
        """Test that out-of-range values fail validation."""
        frame = generate_loan_data(5, np.random.default_rng(0))
        frame.loc[0, "has_default"] = "maybe"
        with pytest.raises(pandera.errors.SchemaError):
            LoanApplicationSchema.validate(frame)
