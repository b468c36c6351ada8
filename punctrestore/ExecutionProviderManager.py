"""Execution Provider Manager for ONNX Runtime - CUDA/CPU selection.

This module manages execution provider selection with automatic fallback chain:
CUDA (GPU) → CPU (baseline)
"""

from typing import Dict, List, Tuple, Union
import onnxruntime as ort
import logging


class ExecutionProviderManager:
    """Manages execution provider selection with CUDA/CPU fallback.

    Responsibilities:
    - Detect available ONNX Runtime providers
    - Select provider based on config and hardware
    - Build provider list and session options for onnxruntime.InferenceSession()
    """

    def __init__(self, config: Dict):
        """Initialize with execution config.

        Args:
            config: Config dict with inference section:
                {
                    "inference": {
                        "provider": "auto"|"cuda"|"cpu",
                        "intra_op_num_threads": 0,
                        "inter_op_num_threads": 0
                    }
                }
        """
        self.config = config
        self.inference_config = config.get('inference', {})
        self.inference_mode = self.inference_config.get('provider', 'auto')
        self.logger = logging.getLogger(__name__)

        self.selected_provider = self.select_provider()

        self.logger.info(f"Execution provider selected: {self.selected_provider}")

    def select_provider(self) -> str:
        """Select provider based on config and hardware.

        Algorithm:
        1. 'cpu' forces CPU
        2. 'cuda' uses CUDA, falling back to CPU if unavailable
        3. 'auto' uses CUDA if available, CPU otherwise

        Returns:
            Selected provider name ('CUDA' or 'CPU')
        """
        if self.inference_mode == 'cpu':
            return 'CPU'

        available_providers = ort.get_available_providers()
        self.logger.debug(f"Available ONNX Runtime providers: {available_providers}")

        if self.inference_mode in ('cuda', 'auto'):
            if 'CUDAExecutionProvider' in available_providers:
                return 'CUDA'
            if self.inference_mode == 'cuda':
                self.logger.warning("CUDA requested but not available, falling back to CPU")
            else:
                self.logger.info("No GPU providers available, using CPU")
            return 'CPU'

        self.logger.warning(f"Unknown inference mode: {self.inference_mode}, falling back to CPU")
        return 'CPU'

    def build_provider_list(self) -> List[Union[str, Tuple[str, Dict]]]:
        """Build ONNX Runtime provider configuration list.

        Returns:
            - CPU only: ['CPUExecutionProvider']
            - CUDA: [('CUDAExecutionProvider', {'device_id': 0}), 'CPUExecutionProvider']
        """
        if self.selected_provider == 'CUDA':
            device_id = int(self.inference_config.get('device_id', 0))
            return [
                ('CUDAExecutionProvider', {'device_id': device_id}),
                'CPUExecutionProvider'
            ]
        return ['CPUExecutionProvider']

    def build_session_options(self) -> ort.SessionOptions:
        """Session options with full graph optimization and configured thread counts (0 = ORT default)."""
        sess_options = ort.SessionOptions()
        sess_options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
        sess_options.intra_op_num_threads = int(self.inference_config.get('intra_op_num_threads', 0))
        sess_options.inter_op_num_threads = int(self.inference_config.get('inter_op_num_threads', 0))
        return sess_options
