"""Project-wide constants."""

# -- Base client defaults ---------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_MAX_RETRIES: int = 0

# -- NASA Open APIs ---------------------------------------------------------
NASA_BASE_URL: str = "https://api.nasa.gov"
NASA_SEARCH_URL: str = f"{NASA_BASE_URL}/techtransfer/patents"
NASA_DEFAULT_QUERY: str = "space biology"
NASA_DEFAULT_LIMIT: int = 100
NASA_UNTITLED: str = "Untitled Research"

# -- LLM --------------------------------------------------------------------
LLM_MAX_TOKENS: int = 2048
INSIGHT_PUBLICATION_LIMIT: int = 10
DEFAULT_INSIGHT_TYPE: str = "recommendation"
DEFAULT_INSIGHT_CONFIDENCE: int = 70
DEFAULT_SIGNIFICANCE: int = 5

# -- Experiments ------------------------------------------------------------
ACTIVE_EXPERIMENT_STATUS: str = "active"

# -- Categorization rules (content substring → tag) ------------------------
# Every matching rule fires for the list-valued categories.
EXPERIMENT_TYPE_RULES: list[tuple[tuple[str, ...], str]] = [
    (("cell", "cellular"), "Cell Biology"),
    (("plant", "botanic", "growth"), "Plant Growth"),
    (("protein", "crystal"), "Protein Crystallization"),
    (("micro", "bacteria", "microbial"), "Microbiology"),
    (("tissue", "organ"), "Tissue Engineering"),
]

ORGANISM_RULES: list[tuple[tuple[str, ...], str]] = [
    (("elegans",), "C. elegans"),
    (("arabidopsis", "thale cress"), "Arabidopsis"),
    (("e. coli", "escherichia"), "E. coli"),
    (("mouse", "mice", "murine"), "Mouse tissue"),
    (("human", "homo sapiens"), "Human cells"),
]

SPACE_CONDITION_RULES: list[tuple[tuple[str, ...], str]] = [
    (("microgravity", "zero gravity", "weightless"), "Microgravity"),
    (("radiation", "cosmic ray"), "Radiation Exposure"),
    (("temperature", "thermal"), "Temperature Variation"),
]

# Ordered by precedence: the first matching rule sets the mission.
MISSION_RULES: list[tuple[tuple[str, ...], str]] = [
    (("iss", "international space station"), "ISS"),
    (("shuttle",), "Space Shuttle"),
    (("mars", "martian"), "Mars Mission"),
]
