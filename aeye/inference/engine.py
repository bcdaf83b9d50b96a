"""
A-Eye Inference Engine
Loads the materialized model once and runs single forward passes on it
Supports: PyTorch lite (.ptl), TorchScript (.pt/.pth), ONNX
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, Sequence, Union

import numpy as np
import torch

from ..core.errors import InferenceFailure, LoadFailure, ShapeMismatch

logger = logging.getLogger('aeye.inference')


RUNTIMES = {
    '.ptl': 'lite',
    '.pt': 'torchscript',
    '.pth': 'torchscript',
    '.torchscript': 'torchscript',
    '.onnx': 'onnx',
}


def check_tensor(values: Sequence[float], shape: Sequence[int]) -> np.ndarray:
    """
    Validate a (buffer, shape) pair and return the buffer as a float32
    array laid out in ``shape``.

    Raises ShapeMismatch when the shape is empty, has a negative or
    non-integer dimension, or implies a different element count than the
    buffer holds.
    """
    dims = list(shape)
    if not dims:
        raise ShapeMismatch("Shape must have at least one dimension")
    for dim in dims:
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)):
            raise ShapeMismatch(f"Shape dimensions must be integers, got {dim!r}")
        if dim < 0:
            raise ShapeMismatch(f"Shape dimensions must be non-negative, got {dim}")
    dims = [int(d) for d in dims]

    try:
        data = np.asarray(values, dtype=np.float32)
    except (TypeError, ValueError) as e:
        raise ShapeMismatch(f"Input must be a flat sequence of numbers: {e}") from e
    if data.ndim != 1:
        raise ShapeMismatch(f"Input must be a flat sequence, got {data.ndim} dimensions")

    expected = math.prod(dims)
    if data.size != expected:
        raise ShapeMismatch(
            f"Shape {dims} implies {expected} elements but input has {data.size}",
            details={'shape': dims, 'expected': expected, 'actual': int(data.size)}
        )

    return data.reshape(dims)


def first_element(output: Any) -> float:
    """Element 0 of the model's (first) output tensor, as a float32 value"""
    if isinstance(output, (tuple, list)):
        if not output:
            raise InferenceFailure("Model returned no outputs")
        output = output[0]

    if isinstance(output, torch.Tensor):
        output = output.detach().cpu().numpy()
    if not isinstance(output, np.ndarray):
        raise InferenceFailure(f"Model output is not a tensor: {type(output).__name__}")

    flat = output.reshape(-1)
    if flat.size == 0:
        raise InferenceFailure("Model output tensor is empty")
    return float(np.float32(flat[0]))


class ModelHandle:
    """
    A loaded, ready-to-run model.

    Only InferenceEngine.load creates handles, so a handle always wraps a
    usable model. evaluate never mutates the model; a failed call leaves the
    handle usable for the next one. Callers serialize evaluate calls.
    """

    def __init__(self, path: Path, runtime: str, model: Any):
        self.path = path
        self.runtime = runtime
        self._model = model

    def __repr__(self):
        return f"ModelHandle(path={str(self.path)!r}, runtime={self.runtime!r})"

    def evaluate(self, values: Sequence[float], shape: Sequence[int]) -> float:
        """
        Run one forward pass on ``values`` laid out as ``shape`` and return
        element 0 of the output.
        """
        tensor = check_tensor(values, shape)

        try:
            if self.runtime == 'onnx':
                output = self._run_onnx(tensor)
            else:
                output = self._run_torch(tensor)
            result = first_element(output)
        except (ShapeMismatch, InferenceFailure):
            raise
        except Exception as e:
            logger.error(f"Inference failed on {self.path.name}: {e}")
            raise InferenceFailure(str(e), details={'shape': list(tensor.shape)}) from e

        logger.debug(f"Inference complete: shape={list(tensor.shape)} result={result}")
        return result

    def _run_torch(self, tensor: np.ndarray):
        with torch.no_grad():
            return self._model(torch.from_numpy(tensor))

    def _run_onnx(self, tensor: np.ndarray):
        input_info = self._model.get_inputs()[0]
        expected = list(input_info.shape or [])

        # Symbolic (str) or unknown (None) dimensions accept any size
        if expected:
            actual = list(tensor.shape)
            fixed_match = all(
                not isinstance(e, int) or e == a
                for e, a in zip(expected, actual)
            )
            if len(expected) != len(actual) or not fixed_match:
                raise ShapeMismatch(
                    f"Model expects input shape {expected}, got {actual}",
                    details={'expected': expected, 'actual': actual}
                )

        return self._model.run(None, {input_info.name: tensor})

    def describe(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            'path': str(self.path),
            'runtime': self.runtime,
        }
        if self.runtime == 'onnx':
            info['inputs'] = [_io_info(i) for i in self._model.get_inputs()]
            info['outputs'] = [_io_info(o) for o in self._model.get_outputs()]
        return info


def _io_info(node) -> Dict[str, Any]:
    return {'name': node.name, 'shape': list(node.shape or [])}


class InferenceEngine:
    """
    Deserializes model files into ModelHandles.

    The runtime is chosen from the file suffix, see RUNTIMES.
    """

    def __init__(self, num_threads: int = 0):
        self.num_threads = num_threads
        if num_threads > 0:
            torch.set_num_threads(num_threads)

    def load(self, path: Union[str, Path]) -> ModelHandle:
        """Load the model at ``path``; raises LoadFailure on any problem"""
        model_path = Path(path)
        runtime = RUNTIMES.get(model_path.suffix.lower())

        if runtime is None:
            raise LoadFailure(
                f"Unsupported model format: {model_path.name}",
                details={'supported': sorted(RUNTIMES)}
            )
        if not model_path.is_file():
            raise LoadFailure(f"Model file not found: {model_path}")

        logger.info(f"Loading {runtime} model: {model_path}")
        try:
            if runtime == 'lite':
                model = self._load_lite(model_path)
            elif runtime == 'onnx':
                model = self._load_onnx(model_path)
            else:
                model = self._load_torchscript(model_path)
        except LoadFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to load model {model_path.name}: {e}")
            raise LoadFailure(f"Failed to load model '{model_path.name}': {e}") from e

        handle = ModelHandle(model_path, runtime, model)
        logger.info(f"Model loaded: {handle}")
        return handle

    def _load_lite(self, model_path: Path):
        """Load a model saved for the PyTorch lite interpreter"""
        from torch.jit.mobile import _load_for_lite_interpreter

        return _load_for_lite_interpreter(str(model_path), map_location='cpu')

    def _load_torchscript(self, model_path: Path):
        """Load a TorchScript model"""
        model = torch.jit.load(str(model_path), map_location='cpu')
        model.eval()
        return model

    def _load_onnx(self, model_path: Path):
        """Load an ONNX model on the CPU execution provider"""
        try:
            import onnxruntime as ort
        except ImportError as e:
            raise LoadFailure("onnxruntime not installed. Cannot load ONNX model.") from e

        session = ort.InferenceSession(str(model_path), providers=['CPUExecutionProvider'])

        input_info = session.get_inputs()[0]
        output_info = session.get_outputs()[0]
        logger.info(f"ONNX model: input={input_info.shape}, output={output_info.shape}")
        return session


def load_model(path: Union[str, Path], num_threads: int = 0) -> ModelHandle:
    return InferenceEngine(num_threads=num_threads).load(path)
