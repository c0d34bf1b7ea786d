"""Activation functions shared by the layers of a CPPN.

Trimmed down from the NEAT-Python style activation set: a fixed-topology
CPPN only ever needs the hyperbolic tangent for hidden layers and the
logistic sigmoid for the output layer.
"""

import types
from typing import Callable

import jax
import jax.numpy as jnp
import numpy as np

# Largest float64 below 1 and smallest positive normal float64.
_BELOW_ONE = float(np.nextafter(1.0, 0.0))
_TINY = float(np.finfo(np.float64).tiny)


def sigmoid_activation(z):
    """Computes the logistic sigmoid `1 / (1 + exp(-z))`.

    The output lies strictly in (0, 1). Inputs are clipped to [-60, 60]
    first so `exp` cannot overflow, and results that round to 1 are pulled
    back to the largest float below it.

    Args:
        z: The input array.

    Returns:
        The output array after applying the sigmoid function.

    Example:
        >>> import jax.numpy as jnp
        >>> sigmoid_activation(jnp.array([-1.0, 0.0, 1.0]))
        Array([0.26894142, 0.5       , 0.73105858], dtype=float64)
    """
    z = jnp.clip(z, -60.0, 60.0)
    return jnp.clip(jax.nn.sigmoid(z), _TINY, _BELOW_ONE)


def tanh_activation(z):
    """Computes the hyperbolic tangent, with output strictly in (-1, 1).

    `tanh` rounds to exactly ±1 once |z| passes about 19 in float64, so the
    result is clamped to the nearest floats inside the open interval.

    Args:
        z: The input array.

    Returns:
        The output array after applying tanh.
    """
    return jnp.clip(jnp.tanh(z), -_BELOW_ONE, _BELOW_ONE)


class InvalidActivationFunction(TypeError):
    """Exception raised for invalid activation functions."""
    pass


def validate_activation(function):
    """Validates if the given object is a valid activation function.

    A valid activation function is a plain function that accepts a single
    argument.

    Raises:
        InvalidActivationFunction: If the function is not a function object or
            does not accept a single argument.
    """
    if not isinstance(function, (types.FunctionType, types.LambdaType)):
        raise InvalidActivationFunction("A function object is required.")

    if function.__code__.co_argcount != 1:  # avoid deprecated use of `inspect`
        raise InvalidActivationFunction("A single-argument function is required.")


class ActivationFunctionSet(object):
    """Registry of activation functions, looked up by name.

    Layers store the name of their activation and resolve it here, so one
    function object is shared by every layer using the same nonlinearity.

    Examples:
        >>> activation_set = ActivationFunctionSet()
        >>> activation_set.is_valid("tanh")
        True
        >>> activation_set.get("sigmoid")(jnp.array(0.0))
        Array(0.5, dtype=float64)
    """

    def __init__(self):
        self.functions = {}
        self.add("sigmoid", sigmoid_activation)
        self.add("tanh", tanh_activation)

    def add(self, name: str, function: Callable):
        """Adds a new activation function to the set.

        Raises:
            InvalidActivationFunction: If the provided function is not valid.
        """
        validate_activation(function)
        self.functions[name] = function

    def get(self, name: str) -> Callable:
        """Retrieves an activation function by its name.

        Raises:
            InvalidActivationFunction: If no function with the given name is found.
        """
        f = self.functions.get(name)
        if f is None:
            raise InvalidActivationFunction(
                "No such activation function: {0!r}".format(name)
            )

        return f

    def is_valid(self, name: str) -> bool:
        return name in self.functions


# Shared by every layer of every network.
activations = ActivationFunctionSet()
