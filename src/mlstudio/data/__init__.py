"""
Dataset layer.

Provides dataset records, the dataset registry, and the built-in
loan approval sample.
"""

from mlstudio.data.datasets import Dataset, DatasetRegistry, Feature, FeatureType
from mlstudio.data.sample import (
    LOAN_FEATURES,
    SAMPLE_DATASET_ID,
    build_sample_dataset,
    generate_loan_data,
)

__all__ = [
    "LOAN_FEATURES",
    "SAMPLE_DATASET_ID",
    "Dataset",
    "DatasetRegistry",
    "Feature",
    "FeatureType",
    "build_sample_dataset",
    "generate_loan_data",
]
