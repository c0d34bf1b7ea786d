"""Seamlessly looping animations from randomly initialised CPPNs.

Network construction and evaluation run with JAX 64-bit types enabled for
the calling thread only; importing the package leaves the process-wide JAX
configuration untouched.
"""
from loop_cppn.errors import CPPNError, DimensionMismatch, InvalidConfiguration
from loop_cppn.config import NetworkConfig, RenderConfig
from loop_cppn.cppn import CPPN, build_cppn, layer_specs
from loop_cppn.render import Frame, Partition, partition_grid, render_frame
from loop_cppn.animation import Animation, assemble_animation, generate

__all__ = [
    "CPPNError",
    "DimensionMismatch",
    "InvalidConfiguration",
    "NetworkConfig",
    "RenderConfig",
    "CPPN",
    "build_cppn",
    "layer_specs",
    "Frame",
    "Partition",
    "partition_grid",
    "render_frame",
    "Animation",
    "assemble_animation",
    "generate",
]
