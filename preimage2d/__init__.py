from .validate import PreconditionError, normalize_point, validate_pair
from .arithmetic import ArithmeticOverflowError, Int64Arithmetic, PythonIntArithmetic, get_arithmetic
from .predicates import (
    ExactPredicate,
    IntegerPredicate,
    Orientation,
    StraightLine,
    orientation,
    orientation_sign,
)
from .config import PreimageConfig, get_preimage_config, set_preimage_config
from .preimage import Extent, Preimage, longest_straight_run
from .adjacency import EIGHT_ADJACENCY, FOUR_ADJACENCY, MetricAdjacency
from .curve import FREEMAN_STEPS, GridCurve, incident_pairs
from .tikz import generate_tikz_code, generate_tikz_document

__all__ = [
    'PreconditionError',
    'normalize_point',
    'validate_pair',
    'ArithmeticOverflowError',
    'Int64Arithmetic',
    'PythonIntArithmetic',
    'get_arithmetic',
    'ExactPredicate',
    'IntegerPredicate',
    'Orientation',
    'StraightLine',
    'orientation',
    'orientation_sign',
    'PreimageConfig',
    'get_preimage_config',
    'set_preimage_config',
    'Extent',
    'Preimage',
    'longest_straight_run',
    'EIGHT_ADJACENCY',
    'FOUR_ADJACENCY',
    'MetricAdjacency',
    'FREEMAN_STEPS',
    'GridCurve',
    'incident_pairs',
    'generate_tikz_code',
    'generate_tikz_document',
]
