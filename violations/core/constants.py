"""Shared constants for the violations report.

Artifact names are a contract with the side that records the build results,
so they must not change.
"""

# =============================================================================
# Artifact layout
# =============================================================================

# Directory under the build root that holds all violations artifacts
VIOLATIONS = "violations"

# Per-build summary artifact: <build-root>/violations/violations.xml
VIOLATIONS_XML = f"{VIOLATIONS}/{VIOLATIONS}.xml"

# Per-file detail artifacts: <build-root>/violations/file/<name>.xml
FILE_DIR = f"{VIOLATIONS}/file"

# =============================================================================
# Health icons
# =============================================================================

HEALTH_00_TO_19 = "health-00to19.png"
HEALTH_20_TO_39 = "health-20to39.png"
HEALTH_40_TO_59 = "health-40to59.png"
HEALTH_60_TO_79 = "health-60to79.png"
HEALTH_80_PLUS = "health-80plus.png"

# =============================================================================
# Threshold defaults
# =============================================================================

DEFAULT_MIN = 10
DEFAULT_MAX = 999

# Max violations listed per type on a file page
DEFAULT_LIMIT = 100

DEFAULT_TYPES = [
    "checkstyle",
    "codenarc",
    "cpd",
    "cpplint",
    "csslint",
    "findbugs",
    "fxcop",
    "gendarme",
    "jcreport",
    "jslint",
    "pep8",
    "perlcritic",
    "pmd",
    "pylint",
    "simian",
    "stylecop",
]

# Size of the parsed model cache (number of builds)
DEFAULT_CACHE_SIZE = 32
