from contentperf.pipeline.dispatcher import (
    PAGE_FILE_CANDIDATES,
    ActionDispatcher,
    find_page_file,
)
from contentperf.pipeline.prompts import PROMPTS, clip_text

__all__ = [
    "PAGE_FILE_CANDIDATES",
    "ActionDispatcher",
    "find_page_file",
    "PROMPTS",
    "clip_text",
]
