# Registry of the cognitive test types a result can be recorded for.
# Each entry defines metadata used by both the result views and the test page.

from .engine import FINAL_LEVEL
from .engine import MAX_ERRORS

SEQUENCE_MEMORY = "sequence_memory"

TEST_REGISTRY: dict[str, dict] = {
    SEQUENCE_MEMORY: {
        "label": "Sequential Memory Test",
        "description": "Measures how well you can memorise sequences of colours.",
        "instructions": [
            "Watch the sequence of flashing colours carefully.",
            "When it ends, repeat the same sequence by pressing the coloured buttons.",
            "Every level adds one more colour to the sequence.",
            f"You have {MAX_ERRORS} attempts: after {MAX_ERRORS} mistakes the test ends.",
            f"Reach level {FINAL_LEVEL} to complete the test.",
        ],
        "symbols": [
            {"id": 0, "name": "Red", "css": "btn-danger"},
            {"id": 1, "name": "Blue", "css": "btn-primary"},
            {"id": 2, "name": "Green", "css": "btn-success"},
            {"id": 3, "name": "Yellow", "css": "btn-warning"},
        ],
    },
}
