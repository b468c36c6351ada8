"""Type definitions for the punctuation restoration pipeline."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Optional, Sequence
import numpy as np
import numpy.typing as npt


class PunctuationClass(IntEnum):
    """Punctuation classes emitted by the model's post_preds head."""
    NONE = 0
    PERIOD = 1
    COMMA = 2
    QUESTION = 3
    # EXCLAMATION = 4  # reserved, the English model does not emit it


PUNCTUATION_MARKS: dict[int, str] = {
    PunctuationClass.NONE: '',
    PunctuationClass.PERIOD: '.',
    PunctuationClass.COMMA: ',',
    PunctuationClass.QUESTION: '?',
}

TERMINAL_MARKS: frozenset[str] = frozenset({'.', '?'})


def mark_for_class(punctuation_class: int) -> str:
    """Return the literal mark for a punctuation class ('' when unrecognized)."""
    return PUNCTUATION_MARKS.get(punctuation_class, '')


class TensorLayout(Enum):
    """Shape tag of a PredictionTensor.

    - CLASS_INDEX: [batch, seq_len], the value at a position is the class index
    - ONE_HOT: [batch, seq_len, num_classes], one-hot slice per position
    - UNSUPPORTED: any other rank, decodes to "no signal"
    """
    CLASS_INDEX = auto()
    ONE_HOT = auto()
    UNSUPPORTED = auto()

    @classmethod
    def from_dims(cls, dims: Sequence[int]) -> "TensorLayout":
        if len(dims) == 2:
            return cls.CLASS_INDEX
        if len(dims) == 3:
            return cls.ONE_HOT
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class PredictionTensor:
    """Classifier output for one signal over a whole sequence.

    Attributes:
        name: Output name ('post_preds', 'cap_preds' or 'seg_preds')
        dims: Declared shape, e.g. (1, seq_len) or (1, seq_len, num_classes)
        data: Flat numeric buffer in row-major order
        layout: Shape tag derived from dims
    """
    name: str
    dims: tuple[int, ...]
    data: npt.NDArray
    layout: TensorLayout = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'layout', TensorLayout.from_dims(self.dims))

    @classmethod
    def from_array(cls, name: str, array) -> "PredictionTensor":
        """Build from an inference output array of any rank."""
        array = np.asarray(array)
        return cls(name=name, dims=tuple(int(d) for d in array.shape), data=array.reshape(-1))

    @classmethod
    def from_buffer(cls, name: str, data: Sequence, dims: Sequence[int]) -> "PredictionTensor":
        """Build from a flat buffer and a declared shape (the buffer is not reshaped)."""
        return cls(name=name, dims=tuple(int(d) for d in dims), data=np.asarray(data).reshape(-1))

    @property
    def num_classes(self) -> int:
        return self.dims[2] if self.layout is TensorLayout.ONE_HOT else 0


@dataclass(frozen=True)
class DecisionContext:
    """Everything the engine needs to decide casing and punctuation for one token."""
    token: str
    previous_token: Optional[str]
    next_token: Optional[str]
    punctuation_class: int = PunctuationClass.NONE
    capitalization_class: int = 0
    segmentation_class: int = 0


@dataclass
class SentenceAssemblyState:
    """Mutable state of one left-to-right restoration pass.

    State Transitions:
    - BUILDING: tokens are appended to buffer
    - TERMINATED: a terminal mark was attached, buffer is flushed into
      sentences and capitalize_next is set, back to BUILDING

    At end of input finish() force-terminates a non-empty buffer.
    """
    buffer: list[str] = field(default_factory=list)
    sentences: list[str] = field(default_factory=list)
    capitalize_next: bool = True

    def append(self, token: str, mark: str = '') -> None:
        """Append a cased token and its mark; flush when the mark ends a sentence."""
        if self.buffer:
            self.buffer.append(' ')
        self.buffer.append(token)
        if mark:
            self.buffer.append(mark)

        if mark in TERMINAL_MARKS:
            self.flush()
            self.capitalize_next = True
        else:
            self.capitalize_next = False

    def flush(self) -> None:
        if self.buffer:
            self.sentences.append(''.join(self.buffer))
        self.buffer = []

    def finish(self) -> None:
        """Synthesize a period on an open sentence and flush it."""
        if not self.buffer:
            return
        if not self.buffer[-1].endswith(tuple(TERMINAL_MARKS)):
            self.buffer.append('.')
        self.flush()

    def text(self) -> str:
        return ' '.join(self.sentences)
