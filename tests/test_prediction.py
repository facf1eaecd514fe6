"""
Test suite for sign predictions.
"""
import numpy as np
import pytest

from sgd_logreg.errors import DimensionMismatch
from sgd_logreg.prediction import predict


class TestPredict:
    """Test mapping of raw scores to labels."""

    def test_signs(self):
        """Test that negative scores map to -1 and positive to +1."""
        theta = np.array([1.0, -1.0])
        data = np.array([[2.0, 0.0, 5.0], [1.0, 3.0, 6.0]])
        assert predict(theta, data).tolist() == [1, -1, -1]

    def test_zero_score_maps_to_positive(self):
        """Test the tie-break for a raw score of exactly zero."""
        theta = np.array([1.0, -1.0])
        data = np.array([[1.0, 0.0], [1.0, 0.0]])
        assert predict(theta, data).tolist() == [1, 1]

    def test_zero_weights_predict_positive(self, blob_split):
        """Test that an all-zero weight vector labels everything +1."""
        _, test_set = blob_split
        predictions = predict(np.zeros(test_set.n_features), test_set)
        assert np.all(predictions == 1)

    @pytest.mark.parametrize("seed", range(5))
    def test_predictions_in_label_range(self, seed):
        """Test that every prediction is -1 or +1."""
        rng = np.random.default_rng(seed)
        theta = rng.normal(size=6)
        data = rng.normal(size=(6, 40))
        predictions = predict(theta, data)
        assert predictions.shape == (40,)
        assert set(np.unique(predictions)) <= {-1, 1}

    def test_accepts_dataset_and_matrix(self, separable_dataset):
        """Test that a dataset and its raw feature matrix predict the same."""
        theta = np.array([0.3, 0.7])
        assert np.array_equal(
            predict(theta, separable_dataset), predict(theta, separable_dataset.features)
        )

    def test_weight_length_mismatch(self):
        """Test that theta must match the feature row count."""
        with pytest.raises(DimensionMismatch):
            predict(np.ones(3), np.ones((2, 4)))

    def test_flat_data_rejected(self):
        """Test that data must be a matrix."""
        with pytest.raises(DimensionMismatch):
            predict(np.ones(2), np.ones(2))
