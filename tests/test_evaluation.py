"""
Test suite for accuracy and single train/evaluate runs.
"""
import numpy as np
import pytest

from sgd_logreg.config import TrainingConfig
from sgd_logreg.entities import LabeledDataset
from sgd_logreg.errors import DimensionMismatch, InvalidArgument
from sgd_logreg.evaluation import accuracy, run_model
from sgd_logreg.prediction import predict
from sgd_logreg.training import train


class TestAccuracy:
    """Test the accuracy metric."""

    def test_identical_labels(self):
        """Test that a vector agrees with itself everywhere."""
        labels = np.array([1, -1, -1, 1, 1])
        assert accuracy(labels, labels) == 1.0

    def test_flipped_labels(self):
        """Test that flipping every sign gives zero accuracy."""
        labels = np.array([1, -1, -1, 1, 1])
        assert accuracy(labels, -labels) == 0.0

    def test_partial_agreement(self):
        """Test the fraction of matching positions."""
        assert accuracy([1, 1, -1, -1], [1, -1, -1, 1]) == 0.5

    @pytest.mark.parametrize("seed", range(5))
    def test_bounds(self, seed):
        """Test that accuracy stays within [0, 1]."""
        rng = np.random.default_rng(seed)
        a = rng.choice([-1, 1], size=25)
        b = rng.choice([-1, 1], size=25)
        assert 0.0 <= accuracy(a, b) <= 1.0

    def test_length_mismatch(self):
        """Test that different lengths fail fast."""
        with pytest.raises(DimensionMismatch):
            accuracy([1, -1, 1], [1, -1])

    def test_empty_inputs(self):
        """Test that empty label vectors are rejected."""
        with pytest.raises(InvalidArgument):
            accuracy([], [])

    def test_matrix_inputs_rejected(self):
        """Test that 2-D label arrays are not silently flattened."""
        with pytest.raises(DimensionMismatch):
            accuracy(np.ones((2, 3)), np.ones((3, 2)))


class TestRunModel:
    """Test the train-then-evaluate cycle."""

    def test_matches_manual_pipeline(self, blob_split):
        """Test that run_model equals train followed by predict and accuracy."""
        train_set, test_set = blob_split
        result = run_model(train_set, test_set, 0.05, np.random.default_rng(17))

        theta = train(train_set, 0.05, rng=np.random.default_rng(17))
        assert np.array_equal(result.theta, theta)
        assert result.train_accuracy == accuracy(train_set.labels, predict(theta, train_set))
        assert result.test_accuracy == accuracy(test_set.labels, predict(theta, test_set))

    def test_accuracies_in_range(self, blob_split):
        """Test that both reported accuracies are valid fractions."""
        train_set, test_set = blob_split
        result = run_model(train_set, test_set, 0.1, 0)
        assert 0.0 <= result.train_accuracy <= 1.0
        assert 0.0 <= result.test_accuracy <= 1.0
        assert result.accuracies == (result.train_accuracy, result.test_accuracy)

    def test_respects_training_config(self, blob_split):
        """Test that convergence options are forwarded to the trainer."""
        train_set, test_set = blob_split
        config = TrainingConfig(convergence_threshold=0.0, max_epochs=2)
        result = run_model(train_set, test_set, 0.05, 3, config=config)
        expected = train(train_set, 0.05, 0.0, 2, rng=3)
        assert np.array_equal(result.theta, expected)

    def test_feature_count_mismatch(self, separable_dataset):
        """Test that train and test sets must share the feature layout."""
        other = LabeledDataset(np.ones((3, 2)), [1, -1])
        with pytest.raises(DimensionMismatch):
            run_model(separable_dataset, other, 0.05, 0)
