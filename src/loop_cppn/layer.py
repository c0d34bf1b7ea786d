"""A single fully connected CPPN layer.

A layer is an immutable weight matrix of shape `(input_size + 1, output_size)`
plus the name of its activation function. The extra row holds the bias
weights; the matching bias input is the constant -1.0.
"""
from dataclasses import dataclass
from typing import NamedTuple

import jax
import jax.numpy as jnp

from loop_cppn.activations import activations
from loop_cppn.errors import DimensionMismatch

BIAS_INPUT = -1.0
WEIGHT_SCALE = 0.5


class LayerSpec(NamedTuple):
    """Declarative shape of one layer, independent of its weights."""
    input_size: int
    output_size: int
    activation: str


def with_bias(signal: jnp.ndarray) -> jnp.ndarray:
    """Appends the constant bias input along the last axis."""
    bias = jnp.full(signal.shape[:-1] + (1,), BIAS_INPUT, dtype=signal.dtype)
    return jnp.concatenate([signal, bias], axis=-1)


def propagate_layer(weights: jnp.ndarray, activation: str, signal: jnp.ndarray) -> jnp.ndarray:
    """Computes `activation(W^T [signal, -1])` for a vector or a batch of vectors."""
    z = jnp.dot(with_bias(signal), weights)
    return activations.get(activation)(z)


@dataclass(frozen=True, eq=False)
class Layer:
    """One affine transform followed by an elementwise nonlinearity.

    Attributes:
        weights (jnp.ndarray): Weight matrix of shape `(input_size + 1, output_size)`.
            Row `input_size` holds the bias weights.
        activation (str): Name of the activation in the shared
            `ActivationFunctionSet`.
    """
    weights: jnp.ndarray
    activation: str

    @property
    def input_size(self) -> int:
        return self.weights.shape[0] - 1

    @property
    def output_size(self) -> int:
        return self.weights.shape[1]

    @property
    def spec(self) -> LayerSpec:
        return LayerSpec(self.input_size, self.output_size, self.activation)

    @jax.enable_x64(True)
    def activate(self, inputs) -> jnp.ndarray:
        """Feeds a signal of shape `(..., input_size)` through the layer.

        Raises:
            DimensionMismatch: If the trailing size of `inputs` is not `input_size`.
        """
        signal = jnp.atleast_1d(jnp.asarray(inputs, dtype=jnp.float64))
        if signal.shape[-1] != self.input_size:
            raise DimensionMismatch(self.input_size, signal.shape[-1], where="layer")
        return propagate_layer(self.weights, self.activation, signal)


@jax.enable_x64(True)
def init_layer(key: jax.Array, spec: LayerSpec) -> Layer:
    """Creates a layer whose weights are drawn i.i.d. from N(0, 0.5^2).

    Args:
        key: A `jax.random` key; the only source of randomness used.
        spec: Shape and activation of the layer.
    """
    activations.get(spec.activation)  # fail early on unknown names
    shape = (spec.input_size + 1, spec.output_size)
    weights = jax.random.normal(key, shape, dtype=jnp.float64) * WEIGHT_SCALE
    return Layer(weights=weights, activation=spec.activation)
