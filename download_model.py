# download_model.py
"""Download the punctuation/true-casing/segmentation model to the models/ directory."""

import sys
from pathlib import Path

from punctrestore.ModelManager import ModelManager, MODEL_REPO


def print_progress(filename: str, progress: float, status: str):
    print(f"  {filename}: {status} ({progress:.0%})")


if __name__ == "__main__":
    models_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("./models")

    print(f"\n=== Downloading {MODEL_REPO} ===")
    missing = ModelManager.get_missing_models(models_dir)
    if not missing:
        print("All model files already present.")
        sys.exit(0)

    if not ModelManager.download_models(models_dir, progress_callback=print_progress):
        print("Download failed.")
        sys.exit(1)

    for name, path in ModelManager.get_model_paths(models_dir).items():
        print(f"{name}: {path} ({path.stat().st_size / 1024:.1f} KB)")
    print("\n=== All models downloaded successfully! ===")
