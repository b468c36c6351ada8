# punctrestore/postprocessing/TensorDecoder.py
import math
from typing import Optional

from ..types import PredictionTensor, TensorLayout


class TensorDecoder:
    """Extracts one integer class prediction per sequence position.

    Dispatches on the tensor's layout tag:
    - CLASS_INDEX ([batch, seq_len]): the value at position is the class index
    - ONE_HOT ([batch, seq_len, num_classes]): index of the first 1 in the slice
    - UNSUPPORTED: always 0

    Malformed input degrades to class 0 (NONE / background) instead of raising,
    so one bad tensor costs a signal, not the whole request.
    """

    def decode(self, tensor: Optional[PredictionTensor], position: int) -> int:
        """Return the predicted class index for position.

        Args:
            tensor: Prediction tensor, or None when the output is missing
            position: Zero-based index into the sequence dimension

        Returns:
            Class index, 0 when out of bounds or no signal is present
        """
        if tensor is None:
            return 0

        if tensor.layout is TensorLayout.CLASS_INDEX:
            return self._decode_class_index(tensor, position)
        elif tensor.layout is TensorLayout.ONE_HOT:
            return self._decode_one_hot(tensor, position)
        else:
            return 0

    def _decode_class_index(self, tensor: PredictionTensor, position: int) -> int:
        if position < 0 or position >= tensor.data.size:
            return 0
        value = float(tensor.data[position])
        if not math.isfinite(value):
            return 0
        return int(value)

    def _decode_one_hot(self, tensor: PredictionTensor, position: int) -> int:
        num_classes = tensor.num_classes
        start = position * num_classes
        if position < 0 or start + num_classes > tensor.data.size:
            return 0

        values = tensor.data[start:start + num_classes].astype(float)
        hits = (values == 1).nonzero()[0]
        return int(hits[0]) if hits.size else 0


_DEFAULT_DECODER = TensorDecoder()


def decode_prediction(tensor: Optional[PredictionTensor], position: int) -> int:
    """Decode with the shared stateless decoder."""
    return _DEFAULT_DECODER.decode(tensor, position)
