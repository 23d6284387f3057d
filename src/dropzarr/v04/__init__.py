"""OME-NGFF v0.4 multiscales models.

Specification: <https://ngff.openmicroscopy.org/0.4>
"""

from dropzarr._axis import Axis, ChannelAxis, CustomAxis, SpaceAxis, TimeAxis

from ._multiscale import (
    Dataset,
    Multiscale,
    ScaleTransformation,
    TranslationTransformation,
)

__all__ = [
    "Axis",
    "ChannelAxis",
    "CustomAxis",
    "Dataset",
    "Multiscale",
    "ScaleTransformation",
    "SpaceAxis",
    "TimeAxis",
    "TranslationTransformation",
]
