"""
ModelManager handles download and validation of the punctuation model files.
"""
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional
from huggingface_hub import hf_hub_download


MODEL_DIR = Path("./models")
MODEL_OWNER = "1-800-BAD-CODE"
MODEL_NAME = "punctuation_fullstop_truecase_english"
MODEL_REPO = f"{MODEL_OWNER}/{MODEL_NAME}"

# source filename in the repo -> local filename
MODEL_FILES: Dict[str, str] = {
    "punct_cap_seg_en.onnx": "model.onnx",
    "spe_32k_lc_en.model": "tokenizer.model",
}

logger = logging.getLogger(__name__)


class ModelManager:
    """
    Manages downloads and validation of the ONNX model and tokenizer files.

    Files live in <model_dir>/<owner>/<name>/ and are fetched from the
    Hugging Face Hub only when missing.
    """

    @staticmethod
    def get_model_dir(model_dir: Optional[Path] = None) -> Path:
        if model_dir is None:
            model_dir = MODEL_DIR
        return Path(model_dir) / MODEL_OWNER / MODEL_NAME

    @staticmethod
    def get_model_paths(model_dir: Optional[Path] = None) -> Dict[str, Path]:
        """
        Returns local paths of the model files.

        Args:
            model_dir: Root models directory (defaults to ./models)

        Returns:
            {'model_path': .../model.onnx, 'tokenizer_path': .../tokenizer.model}
        """
        target_dir = ModelManager.get_model_dir(model_dir)
        return {
            'model_path': target_dir / MODEL_FILES["punct_cap_seg_en.onnx"],
            'tokenizer_path': target_dir / MODEL_FILES["spe_32k_lc_en.model"],
        }

    @staticmethod
    def validate_model(filename: str, model_dir: Optional[Path] = None) -> bool:
        """
        Validates that a local model file exists and is non-empty.

        Args:
            filename: Local filename ('model.onnx' or 'tokenizer.model')
            model_dir: Root models directory (defaults to ./models)

        Returns:
            True if the file exists and is valid, False otherwise
        """
        if filename not in MODEL_FILES.values():
            return False

        path = ModelManager.get_model_dir(model_dir) / filename
        return path.exists() and path.stat().st_size > 0

    @staticmethod
    def get_missing_models(model_dir: Optional[Path] = None) -> List[str]:
        """
        Returns list of missing local filenames, e.g. ['model.onnx'] or [].
        """
        return [target for target in MODEL_FILES.values()
                if not ModelManager.validate_model(target, model_dir)]

    @staticmethod
    def download_models(model_dir: Optional[Path] = None,
                        progress_callback: Optional[Callable[[str, float, str], None]] = None) -> bool:
        """
        Downloads missing model files with optional progress tracking.

        Args:
            model_dir: Root models directory (defaults to ./models)
            progress_callback: Callback function with signature:
                def callback(filename: str, progress: float, status: str):
                    # progress: 0.0 to 1.0
                    # status: 'downloading' | 'complete' | 'error'

        Returns:
            True if all files are present afterwards, False otherwise
        """
        missing = ModelManager.get_missing_models(model_dir)
        if not missing:
            logger.debug("All model files present, skipping download")
            return True

        target_dir = ModelManager.get_model_dir(model_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        sources = {target: source for source, target in MODEL_FILES.items()}

        filename = None
        try:
            for filename in missing:
                if progress_callback:
                    progress_callback(filename, 0.0, 'downloading')

                logger.info(f"Downloading {filename} from {MODEL_REPO}...")
                ModelManager._download_file(sources[filename], filename, target_dir)

                if progress_callback:
                    progress_callback(filename, 1.0, 'complete')

            logger.info("All downloads complete!")
            return True

        except Exception as e:
            logger.error(f"Model download error: {type(e).__name__}: {e}")

            if progress_callback:
                progress_callback(filename or 'unknown', 0.0, 'error')

            ModelManager._cleanup_partial_files(target_dir)
            return False

    @staticmethod
    def _download_file(source_filename: str, target_filename: str, target_dir: Path):
        """
        Downloads one file and renames it to the name the restorer expects.

        Args:
            source_filename: Filename in the Hugging Face repository
            target_filename: Local filename
            target_dir: Directory to download into
        """
        downloaded = Path(hf_hub_download(
            repo_id=MODEL_REPO,
            filename=source_filename,
            local_dir=str(target_dir)
        ))

        target_path = target_dir / target_filename
        if downloaded != target_path:
            downloaded.replace(target_path)

    @staticmethod
    def _cleanup_partial_files(target_dir: Path):
        """
        Removes partial and empty files left by a failed download.
        """
        if not target_dir.exists():
            return
        for partial_file in target_dir.glob("*.incomplete"):
            partial_file.unlink(missing_ok=True)
        for target in MODEL_FILES.values():
            path = target_dir / target
            if path.exists() and path.stat().st_size == 0:
                path.unlink()
