import argparse
import json
from pathlib import Path
from typing import List

from tqdm import tqdm

from story_assembly.config.assembly_config import AssemblyConfig
from story_assembly.errors import FormatError
from story_assembly.pipeline.story_assembler import StoryAssembler

"""
    Assemble saved generateContent responses into the records stored for each story.
    Bash command to run the script:
        python -m story_assembly.tools.assemble_story --response response.json --output story.json
        python -m story_assembly.tools.assemble_story --input_dir responses/ --output stories.json --language spanish
"""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Assemble generation responses into stored story records')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--response', type=str, default=None,
                        help='Path to a JSON file with one generateContent response')
    source.add_argument('--input_dir', type=str, default=None,
                        help='Directory of *.json response files to assemble')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML file overriding the assembly config')
    parser.add_argument('--language', type=str, default=None,
                        help='Story language (english or spanish), overrides the config')
    parser.add_argument('--output', type=str, default=None,
                        help='Where to write the records, printed to stdout if omitted')

    return parser.parse_args(argv)


def load_config(config_path: str = None, language: str = None) -> AssemblyConfig:
    config = AssemblyConfig.from_yaml(config_path) if config_path else AssemblyConfig()
    if language:
        config.language = language
    return config


def assemble_files(assembler: StoryAssembler, paths: List[Path]) -> List[dict]:
    """Assemble each response file, skipping (and reporting) the ones that cannot be parsed."""
    records = []
    for path in tqdm(paths, desc="Assembling stories", disable=len(paths) < 2):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                response = json.load(f)
            story = assembler.assemble_response(response)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, FormatError) as e:
            print(f"Error assembling {path}: {e}")
            continue

        record = story.to_record()
        record["source"] = str(path)
        record["repositioned"] = story.was_repositioned
        records.append(record)
    return records


def main(argv=None):
    args = parse_args(argv)
    assembler = StoryAssembler(load_config(args.config, args.language))

    if args.response:
        paths = [Path(args.response)]
    else:
        paths = sorted(Path(args.input_dir).glob("*.json"))
        if not paths:
            raise ValueError(f"No response files found in {args.input_dir}")

    records = assemble_files(assembler, paths)
    output = records[0] if args.response and records else records
    serialized = json.dumps(output, ensure_ascii=False, indent=2)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(serialized)
        print(f"Wrote {len(records)} of {len(paths)} stories to {args.output}")
    else:
        print(serialized)

    return records


if __name__ == "__main__":
    main()
