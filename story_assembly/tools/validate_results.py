import argparse
import json
from typing import List

from story_assembly.errors import FormatError
from story_assembly.models.structured_story.story_part import ImagePart
from story_assembly.models.structured_story.story_result import StoryResult


def validate_record(record: dict) -> List[str]:
    """
    Check one stored story record.

    Returns:
        A list of problems, empty when the record is valid
    """
    problems = []
    serialized = record.get("structured_content")
    if serialized is None:
        # Stories saved before structured content only have the plain text
        return problems

    try:
        result = StoryResult.from_json(serialized)
    except FormatError as e:
        return [f"Structured content could not be loaded: {e}"]

    content = result.structured_content
    referenced = {part.image_index for part in content.parts if isinstance(part, ImagePart)}
    unreferenced = sorted(set(range(len(content.images))) - referenced)
    if unreferenced:
        problems.append(f"Images never shown: {', '.join(map(str, unreferenced))}")

    if "content" in record and record["content"] != result.text:
        problems.append("Plain text content does not match the structured content")

    return problems


def validate_records(records: List[dict]) -> int:
    """
    Validate stored story records, printing each problem and a summary.

    Returns:
        The number of records with problems
    """
    total = len(records)
    print(f"Validating {total} records...")

    invalid = 0
    for idx, record in enumerate(records):
        problems = validate_record(record)
        if problems:
            invalid += 1
            print(f"\nIssues found in record {idx} (Title: {record.get('title', '')}):")
            for problem in problems:
                print(f"- {problem}")

    valid = total - invalid
    print("\nValidation Summary:")
    print("=" * 50)
    print(f"Total records processed: {total}")
    if total:
        print(f"Records with problems: {invalid} ({invalid / total * 100:.2f}%)")
        print(f"Completely valid records: {valid} ({valid / total * 100:.2f}%)")
    return invalid


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Validate stored story records')
    parser.add_argument('--input', type=str, required=True,
                        help='JSON file with one record or a list of records')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    with open(args.input, 'r', encoding='utf-8') as f:
        records = json.load(f)
    if isinstance(records, dict):
        records = [records]
    return validate_records(records)


if __name__ == "__main__":
    main()
