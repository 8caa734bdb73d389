from dataclasses import dataclass, field, fields
from typing import Dict, List

import yaml


def _default_quantile_fractions() -> Dict[int, List[float]]:
    return {
        1: [0.5],
        2: [0.33, 0.66],
        3: [0.25, 0.5, 0.75],
    }


@dataclass
class AssemblyConfig:
    distribution_threshold: float = field(default=0.5, metadata={"help": "Minimum fraction of images that must appear before the last text part for the model's own interleaving to be kept"})
    max_quantile_images: int = field(default=3, metadata={"help": "Maximum number of images placed at quantile positions in paragraph mode, extra images are appended at the end"})
    quantile_fractions: Dict[int, List[float]] = field(default_factory=_default_quantile_fractions, metadata={"help": "Fractions of the text at which 1, 2 or 3 images are inserted"})
    min_paragraphs_for_paragraph_mode: int = field(default=3, metadata={"help": "Below this many paragraphs the text is split into sentences for image placement"})
    strip_image_markers: bool = field(default=True, metadata={"help": "Remove [Image: ...] markers from the story text once their alt text is read"})
    verify_images: bool = field(default=True, metadata={"help": "Check that inline image payloads open as images, not only that they are valid base64"})
    language: str = field(default="english", metadata={"help": "Name of the language profile used to clean the story text"})

    def __post_init__(self):
        if not 0 < self.distribution_threshold <= 1:
            raise ValueError("distribution_threshold must be in the interval (0, 1]")
        if self.max_quantile_images < 1:
            raise ValueError("max_quantile_images must be at least 1")
        if self.min_paragraphs_for_paragraph_mode < 1:
            raise ValueError("min_paragraphs_for_paragraph_mode must be at least 1")

        # YAML may give the keys as strings
        self.quantile_fractions = {int(count): list(fractions) for count, fractions in self.quantile_fractions.items()}
        for count in range(1, self.max_quantile_images + 1):
            if count not in self.quantile_fractions:
                raise ValueError(f"quantile_fractions is missing an entry for {count} image(s)")
        for count, fractions in self.quantile_fractions.items():
            if len(fractions) != count:
                raise ValueError(f"quantile_fractions for {count} image(s) must have {count} values")
            if any(not 0 <= fraction <= 1 for fraction in fractions):
                raise ValueError(f"quantile_fractions for {count} image(s) must be within [0, 1]")

    @classmethod
    def from_yaml(cls, config_path: str) -> "AssemblyConfig":
        """
        Load a config from a YAML file. Keys not present in the file keep their defaults.

        Raises:
            ValueError: if the file contains unknown keys or invalid values.
        """
        with open(config_path, 'r') as f:
            values = yaml.safe_load(f) or {}

        if not isinstance(values, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

        return cls(**values)
