"""General functionality."""

from .basics import parallel, generate_items, output, warn, format_seconds, format_number, format_table
from .enumeration import partitions, permutations, lattice_points
from .intervals import (
    get_context, from_rational, enclose, get_endpoints, get_midpoint, get_radius, is_exact_zero
)
