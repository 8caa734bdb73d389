# Built-in profiles register themselves on import
from story_assembly.languages import english, spanish  # noqa: F401
