"""
Autotiler - compile corner-based autotiles into 256 neighbour variants and
encode map layers to match.
"""

from .autotile import Autotile, MalformedAutotileError, VariantOutOfRangeError
from .corners import Corner, CornerShape, Direction, classify_corner, describe_mask
from .layer import (
    LayerSize,
    encode_autotile_slot,
    encode_layer,
    pack_index,
    pending_sentinel,
    unpack_index,
)
from .layout import source_offset
from .registry import AutotileRegistry, render_layer

__version__ = '1.0.0'
__all__ = [
    'Autotile',
    'AutotileRegistry',
    'Corner',
    'CornerShape',
    'Direction',
    'LayerSize',
    'MalformedAutotileError',
    'VariantOutOfRangeError',
    'classify_corner',
    'describe_mask',
    'encode_autotile_slot',
    'encode_layer',
    'pack_index',
    'pending_sentinel',
    'render_layer',
    'source_offset',
    'unpack_index',
]
