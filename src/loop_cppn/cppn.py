"""Fixed-topology Compositional Pattern Producing Networks.

The network is a plain stack of fully connected layers: tanh hidden layers
followed by a sigmoid output layer. Its topology comes entirely from a
`NetworkConfig` and its weights are drawn once from an explicit
`jax.random` key; afterwards it is a pure function of its inputs and can
be shared, read-only, by any number of rendering threads.

Key components:
    - `layer_specs`: the declarative list of layer shapes for a config.
    - `build_cppn`: materialises the specs with random weights.
    - `CPPN.feed_forward`: evaluates the network on one or many feature vectors.
"""
from dataclasses import dataclass
from functools import partial
from typing import List, Tuple, Union

import jax
import jax.numpy as jnp

from loop_cppn.config import NetworkConfig
from loop_cppn.errors import DimensionMismatch, InvalidConfiguration
from loop_cppn.layer import Layer, LayerSpec, init_layer, propagate_layer

HIDDEN_ACTIVATION = "tanh"
OUTPUT_ACTIVATION = "sigmoid"


def layer_specs(config: NetworkConfig) -> List[LayerSpec]:
    """Derives the layer shapes of a network.

    The first layer maps the inputs to the hidden width, `num_hidden_layers - 1`
    further tanh layers keep that width, and a sigmoid layer maps it to the
    outputs. Sizes exclude the bias input.

    Example:
        >>> layer_specs(NetworkConfig(5, 2, 8, 3))
        [LayerSpec(input_size=5, output_size=8, activation='tanh'), LayerSpec(input_size=8, output_size=8, activation='tanh'), LayerSpec(input_size=8, output_size=3, activation='sigmoid')]
    """
    specs = [LayerSpec(config.num_inputs, config.num_hidden_neurons, HIDDEN_ACTIVATION)]
    for _ in range(1, config.num_hidden_layers):
        specs.append(
            LayerSpec(config.num_hidden_neurons, config.num_hidden_neurons, HIDDEN_ACTIVATION)
        )
    specs.append(LayerSpec(config.num_hidden_neurons, config.num_outputs, OUTPUT_ACTIVATION))
    return specs


@partial(jax.jit, static_argnums=(0,))
def _forward(activation_names: Tuple[str, ...], weights: Tuple[jnp.ndarray, ...], signal):
    for name, w in zip(activation_names, weights):
        signal = propagate_layer(w, name, signal)
    return signal


@dataclass(frozen=True, eq=False)
class CPPN:
    """An immutable feedforward CPPN.

    Attributes:
        config (NetworkConfig): The shape the network was built from.
        layers (Tuple[Layer, ...]): Layers in evaluation order. The output size
            of each layer equals the input size of the next one.
    """
    config: NetworkConfig
    layers: Tuple[Layer, ...]

    def __post_init__(self):
        if not self.layers:
            raise InvalidConfiguration("a CPPN needs at least one layer")
        if self.layers[0].input_size != self.config.num_inputs:
            raise InvalidConfiguration(
                f"first layer takes {self.layers[0].input_size} inputs, "
                f"config says {self.config.num_inputs}"
            )
        if self.layers[-1].output_size != self.config.num_outputs:
            raise InvalidConfiguration(
                f"last layer emits {self.layers[-1].output_size} outputs, "
                f"config says {self.config.num_outputs}"
            )
        for i, (prev, nxt) in enumerate(zip(self.layers, self.layers[1:])):
            if prev.output_size != nxt.input_size:
                raise InvalidConfiguration(
                    f"layer {i} emits {prev.output_size} values "
                    f"but layer {i + 1} takes {nxt.input_size}"
                )

    @property
    def num_inputs(self) -> int:
        return self.config.num_inputs

    @property
    def num_outputs(self) -> int:
        return self.config.num_outputs

    def layer_shapes(self) -> List[Tuple[int, int]]:
        """`(input_size, output_size)` of every layer, bias excluded."""
        return [(layer.input_size, layer.output_size) for layer in self.layers]

    def _check_inputs(self, inputs) -> jnp.ndarray:
        signal = jnp.atleast_1d(jnp.asarray(inputs, dtype=jnp.float64))
        if signal.shape[-1] != self.num_inputs:
            raise DimensionMismatch(self.num_inputs, signal.shape[-1])
        return signal

    @jax.enable_x64(True)
    def feed_forward(self, inputs) -> jnp.ndarray:
        """Evaluates the network.

        Args:
            inputs: A feature vector of length `num_inputs`, or any array whose
                last axis has that length (one vector per leading index).

        Returns:
            An array with the same leading shape and a last axis of length
            `num_outputs`; every value lies in (0, 1).

        Raises:
            DimensionMismatch: If the last axis of `inputs` is not `num_inputs` long.
        """
        signal = self._check_inputs(inputs)
        names = tuple(layer.activation for layer in self.layers)
        weights = tuple(layer.weights for layer in self.layers)
        return _forward(names, weights, signal)

    @jax.enable_x64(True)
    def trace(self, inputs) -> List[jnp.ndarray]:
        """Like `feed_forward`, but returns the output of every layer."""
        signal = self._check_inputs(inputs)
        outputs = []
        for layer in self.layers:
            signal = layer.activate(signal)
            outputs.append(signal)
        return outputs


@jax.enable_x64(True)
def build_cppn(config: NetworkConfig, key: Union[jax.Array, int]) -> CPPN:
    """Builds a CPPN with freshly drawn weights.

    Each layer gets its own sub-key split from `key`, so the weights depend
    only on the key and the config, never on global random state.

    Args:
        config: Shape of the network.
        key: A `jax.random` key, or an integer seed to derive one from.

    Returns:
        A new `CPPN`.
    """
    if isinstance(key, int):
        key = jax.random.PRNGKey(key)
    specs = layer_specs(config)
    keys = jax.random.split(key, len(specs))
    layers = tuple(init_layer(k, spec) for k, spec in zip(keys, specs))
    return CPPN(config=config, layers=layers)
