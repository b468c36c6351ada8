import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import onnxruntime as ort

from .ExecutionProviderManager import ExecutionProviderManager
from .ModelManager import ModelManager
from .SentenceSplitter import SentenceSplitter
from .Tokenizer import Tokenizer
from .postprocessing.Lexicon import Lexicon
from .postprocessing.RestorationEngine import RestorationEngine
from .types import PredictionTensor

if TYPE_CHECKING:
    from onnxruntime import InferenceSession


DEFAULT_CONFIG: Dict[str, Any] = {
    "tokenizer": {
        "max_length": 512
    },
    "inference": {
        "provider": "auto",
        "device_id": 0,
        "intra_op_num_threads": 0,
        "inter_op_num_threads": 0
    },
    "postprocessing": {
        "debug_token_limit": 3,
        "lexicon": {}
    },
    "sentence_splitter": {
        "language": "english",
        "auto_download": True
    },
    "session": {
        "release_after_restore": True
    }
}


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from JSON file on top of DEFAULT_CONFIG.

    Args:
        config_path: Path to restore_config.json

    Returns:
        Configuration dictionary
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        return merge_config(DEFAULT_CONFIG, json.load(f))


class PunctuationRestorer:
    """Restores punctuation, casing and sentence boundaries for plain texts.

    Pipeline per text: Tokenizer → ONNX session (post_preds, cap_preds,
    seg_preds) → RestorationEngine → SentenceSplitter.

    The session is created lazily by initialize() after the model files are
    ensured on disk. A session passed in by the caller is used as-is and never
    released by this class.

    Args:
        config: Configuration dictionary (merged over DEFAULT_CONFIG)
        config_path: Path to a JSON config file, used when config is None
        models_dir: Root models directory (defaults to ModelManager.MODEL_DIR)
        session: Pre-built inference session (skips download and creation)
        splitter: Sentence splitter (defaults to NLTK Punkt from config)
    """

    OUTPUT_NAMES = ('post_preds', 'cap_preds', 'seg_preds')

    def __init__(self,
                 config: Optional[Dict[str, Any]] = None,
                 config_path: Optional[str] = None,
                 models_dir: Optional[Path] = None,
                 session: Optional["InferenceSession"] = None,
                 splitter: Optional[SentenceSplitter] = None) -> None:
        if config is None and config_path is not None:
            self.config: Dict[str, Any] = load_config(config_path)
        else:
            self.config = merge_config(DEFAULT_CONFIG, config or {})

        self.models_dir: Optional[Path] = models_dir
        self.logger = logging.getLogger(__name__)

        post_config = self.config['postprocessing']
        self.engine: RestorationEngine = RestorationEngine(
            lexicon=Lexicon.from_config(post_config.get('lexicon')),
            debug_token_limit=int(post_config.get('debug_token_limit', 3)),
        )
        self.tokenizer: Tokenizer = Tokenizer(
            max_length=int(self.config['tokenizer']['max_length']),
            engine=self.engine,
        )

        splitter_config = self.config['sentence_splitter']
        self.splitter: SentenceSplitter = splitter or SentenceSplitter(
            language=splitter_config.get('language', 'english'),
            auto_download=bool(splitter_config.get('auto_download', False)),
        )

        self.session: Optional["InferenceSession"] = session
        self._owns_session: bool = session is None

    def initialize(self) -> None:
        """Download missing model files and create the inference session.

        Raises:
            RuntimeError: If download, session creation or tokenizer loading fails
        """
        if self.session is not None:
            return

        try:
            if not ModelManager.download_models(self.models_dir):
                raise RuntimeError("model download failed")

            paths = ModelManager.get_model_paths(self.models_dir)
            provider_manager = ExecutionProviderManager(self.config)
            self.session = ort.InferenceSession(
                str(paths['model_path']),
                sess_options=provider_manager.build_session_options(),
                providers=provider_manager.build_provider_list()
            )
            self.tokenizer.load_model(paths['tokenizer_path'])
            self._owns_session = True
            self.logger.info(f"Punctuation model loaded from {paths['model_path']}")
        except Exception as e:
            self.session = None
            raise RuntimeError(f"Failed to initialize ONNX model: {e}") from e

    def cleanup(self) -> None:
        """Release the session if this instance created it."""
        if self.session is not None and self._owns_session:
            self.session = None
            self.logger.debug("Inference session released")

    def restore_text(self, text: str) -> str:
        """Run one text through tokenizer, model and engine; returns the punctuated string."""
        tokens = self.tokenizer.tokenize(text)
        feeds = self.tokenizer.to_model_input(tokens)

        try:
            outputs = self.session.run(None, feeds)
            names = [output.name for output in self.session.get_outputs()]
            tensors = {
                name: PredictionTensor.from_array(name, value)
                for name, value in zip(names, outputs)
                if name in self.OUTPUT_NAMES
            }
            return self.tokenizer.postprocess(tokens, tensors)
        except Exception as e:
            raise RuntimeError(f"Failed to process text: {e}") from e

    def restore(self, texts: List[str]) -> List[str]:
        """Restore punctuation for each text and split the results into sentences.

        Args:
            texts: List of raw texts

        Returns:
            Sentences of all texts, in input order

        Raises:
            ValueError: If texts is not a list of strings
            RuntimeError: If initialization or processing of a text fails
        """
        if not isinstance(texts, list) or not all(isinstance(text, str) for text in texts):
            raise ValueError("Input must be a list of strings")

        if self.session is None:
            self.initialize()

        try:
            results = [self.restore_text(text) for text in texts]

            sentences: List[str] = []
            for result in results:
                sentences.extend(self.splitter.split(result))
            self.logger.debug(f"Restored {len(texts)} text(s) into {len(sentences)} sentence(s)")
            return sentences
        finally:
            if self.config['session'].get('release_after_restore', True):
                self.cleanup()
