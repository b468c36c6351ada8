# tests/conftest.py
import pytest
import numpy as np
from unittest.mock import Mock

from punctrestore.types import PredictionTensor
from punctrestore.postprocessing.RestorationEngine import RestorationEngine

CLS = '[CLS]'
SEP = '[SEP]'


def class_index_tensor(name, values):
    """Rank-2 tensor [1, seq_len] holding class indices."""
    return PredictionTensor.from_array(name, np.array([values], dtype=np.int64))


def one_hot_tensor(name, values, num_classes):
    """Rank-3 tensor [1, seq_len, num_classes] with a one-hot row per class index."""
    return PredictionTensor.from_array(name, np.eye(num_classes, dtype=np.float32)[values][np.newaxis, :, :])


@pytest.fixture
def engine():
    return RestorationEngine()


@pytest.fixture
def make_outputs():
    """Build the three named prediction tensors from per-content-token class lists.

    Omitted signals default to class 0 everywhere.
    """
    def _make(length, punct=None, cap=None, seg=None):
        return {
            'post_preds': class_index_tensor('post_preds', punct or [0] * length),
            'cap_preds': class_index_tensor('cap_preds', cap or [0] * length),
            'seg_preds': class_index_tensor('seg_preds', seg or [0] * length),
        }
    return _make


def session_output(name):
    """Stand-in for onnxruntime.NodeArg (only .name is used)."""
    output = Mock()
    output.name = name
    return output


@pytest.fixture
def mock_session():
    """Inference session double returning all-zero predictions of shape (1, 512)."""
    session = Mock()
    session.get_outputs.return_value = [
        session_output('post_preds'),
        session_output('cap_preds'),
        session_output('seg_preds'),
    ]
    zeros = np.zeros((1, 512), dtype=np.int64)
    session.run.return_value = [zeros, zeros.copy(), zeros.copy()]
    return session
