"""
A-Eye Inference Module
Loads the on-device model and evaluates single tensors
"""

from .engine import InferenceEngine, ModelHandle, RUNTIMES, check_tensor, first_element, load_model

__all__ = ['InferenceEngine', 'ModelHandle', 'RUNTIMES', 'check_tensor', 'first_element', 'load_model']
