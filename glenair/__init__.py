"""
glenair - Series 80 connector part-number builder.

Public API:
    PartNumberBuilder           → staged configurator (builder)
    synthesize / parse_part_number → part-number grammar (numbering)
    parse_value / format_value  → AWG / mm² handling (units)
    ReferenceData, QueryFailure → catalog lookup contract (reference)
"""

from glenair.models import (                                   # noqa: F401
    Arrangement,
    BuilderResult,
    BuilderSelection,
    Candidates,
    Contact,
    ContactType,
    SHELL_STYLES,
    Stage,
    WireContactMapping,
    WireSystem,
)
from glenair.reference import QueryFailure, ReferenceData      # noqa: F401
from glenair.numbering import synthesize, parse_part_number    # noqa: F401
from glenair.units import (                                    # noqa: F401
    AWG_TO_MM2,
    STANDARD_WIRE_SIZES,
    format_value,
    parse_value,
)
from glenair.builder import PartNumberBuilder                  # noqa: F401
