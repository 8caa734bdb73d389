import argparse
import json
from typing import List, Tuple

from story_assembly.languages.language_registry import LanguageRegistry
from story_assembly.processing.title_extractor import TitleExtractor


def clean_records(records: List[dict], extractor: TitleExtractor) -> Tuple[List[dict], int]:
    """
    Remove title duplication from the content of stored stories.

    Records without a title or content are left untouched.

    Returns:
        The cleaned records and how many of them changed
    """
    cleaned = []
    updated = 0
    for record in records:
        title = record.get("title")
        content = record.get("content")
        if not title or content is None:
            cleaned.append(record)
            continue

        cleaned_content = extractor.clean_body(content, title)
        if cleaned_content != content:
            record = dict(record, content=cleaned_content)
            updated += 1
        cleaned.append(record)
    return cleaned, updated


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Remove duplicated titles from stored story content')
    parser.add_argument('--input', type=str, required=True,
                        help='JSON file with a list of {"title", "content"} records')
    parser.add_argument('--output', type=str, default=None,
                        help='Where to write the cleaned records, defaults to overwriting the input')
    parser.add_argument('--language', type=str, default="english",
                        help='Story language (english or spanish)')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    with open(args.input, 'r', encoding='utf-8') as f:
        records = json.load(f)

    extractor = TitleExtractor(LanguageRegistry.get_language(args.language))
    cleaned, updated = clean_records(records, extractor)

    if updated > 0:
        with open(args.output or args.input, 'w', encoding='utf-8') as f:
            json.dump(cleaned, f, ensure_ascii=False, indent=2)
        print(f"Cleaned up {updated} stories to remove title duplication")
    else:
        print("No stories needed cleanup")
    return updated


if __name__ == "__main__":
    main()
