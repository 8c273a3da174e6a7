# config/constants.py
"""
Application constants for rice inspection
Grain vocabularies, defect types, report labels and form limits
"""

# ============================================================================
# GRAIN VOCABULARY
# ============================================================================

GRAIN_SHAPES = ("wholegrain", "broken")

GRAIN_TYPES = ("white", "chalky", "yellow", "red", "damage", "glutinous", "paddy")

# Non-defect baseline type
BASELINE_GRAIN_TYPE = "white"

# ============================================================================
# DEFECT CONSTANTS
# ============================================================================

# Report order of defect rows. Extending the vocabulary only touches this tuple.
DEFECT_TYPES = ("yellow", "red", "damage", "paddy", "chalky", "glutinous")

# Label of the aggregate defect row
TOTAL_DEFECT_LABEL = "total"

# ============================================================================
# REPORT FORMATTING
# ============================================================================

PERCENT_DECIMALS = 2
LENGTH_UNIT = "mm"

# ============================================================================
# COMPARISON TAGS
# ============================================================================

MIN_CONDITION_TAGS = ("GT", "GE")
MAX_CONDITION_TAGS = ("LT", "LE")

# ============================================================================
# INSPECTION FORM CONSTANTS
# ============================================================================

SAMPLING_POINTS = ("Front End", "Back End", "Other")

MIN_PRICE = 0
MAX_PRICE = 100000

# Inspection ids look like INS123456789
INSPECTION_ID_PREFIX = "INS"
