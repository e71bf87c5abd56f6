#!/usr/bin/env python3
"""
Synchronize the translated variant of a project document.

Reads the source document (JSON), translates only the fields that changed
since the last run and writes the target-language document.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from data.database import DatabaseManager
from llm.client_factory import LLMClientFactory
from llm.errors import LLMError
from sync.hash_store import HashStore
from sync.synchronizer import DocumentSynchronizer, TranslationFailedError
from translation.field_translator import FieldTranslator


def load_json(path: str):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(path: str, data) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


async def sync_document(
    source_path: str,
    target_language: str,
    existing_target_path: str = None,
    document_id: str = None,
    output_path: str = None,
    provider: str = None,
    model: str = None,
    database_url: str = None
):
    """Synchronize a source JSON document into the target language."""

    print("=" * 70)
    print(f"📝 Document Sync (→ {target_language.upper()})")
    print("=" * 70)

    source = load_json(source_path)
    document_id = document_id or Path(source_path).stem

    existing_target = None
    if existing_target_path and Path(existing_target_path).exists():
        existing_target = load_json(existing_target_path)

    print(f"\n📄 Document: {document_id}")
    print(f"🗂️  Existing target: {existing_target_path if existing_target is not None else 'none'}")

    db_manager = DatabaseManager(database_url)
    db_manager.create_tables()

    llm_client = LLMClientFactory.create_client(
        provider=provider or settings.llm_provider,
        model=model or settings.llm_model,
        api_key=settings.openai_api_key,
        ollama_base_url=settings.ollama_base_url,
        ollama_timeout=settings.ollama_timeout
    )

    synchronizer = DocumentSynchronizer(
        translator=FieldTranslator(llm_client),
        hash_store=HashStore(db_manager)
    )

    result = await synchronizer.synchronize(
        source,
        target_language,
        existing_target_document=existing_target,
        document_id=document_id
    )

    output_path = output_path or existing_target_path or f"{Path(source_path).stem}_{target_language}.json"
    save_json(output_path, result.translated_document)

    stats = result.stats
    print("\n" + "=" * 70)
    if stats.outcome == 'up_to_date':
        print("✅ No changes detected - all fields up to date.")
    elif stats.outcome == 'partial':
        print(f"⚠️  Partially done: {stats.translated}/{stats.changed} fields translated.")
        print("   Run again to retry the remaining fields.")
    else:
        print(f"✅ Translation complete: {stats.translated}/{stats.changed} fields.")
    print(f"📊 Total translatable fields: {stats.total}")
    print(f"📄 Output: {output_path}")
    print("=" * 70)

    return result


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Incrementally translate a JSON project document'
    )
    parser.add_argument('source', help='Source-language document (JSON)')
    parser.add_argument('--target-language', required=True, help='Target language code, e.g. si')
    parser.add_argument('--existing-target', default=None, help='Current target-language document (JSON)')
    parser.add_argument('--document-id', default=None, help='Document id for stored hashes (default: file name)')
    parser.add_argument('--output', default=None, help='Output path (default: --existing-target or <source>_<lang>.json)')
    parser.add_argument('--provider', default=None, help="LLM provider ('openai' or 'ollama')")
    parser.add_argument('--model', default=None, help='LLM model name')
    parser.add_argument('--database-url', default=None, help='Hash store database URL')

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level, format='%(levelname)s %(name)s: %(message)s')

    try:
        asyncio.run(sync_document(
            args.source,
            args.target_language,
            existing_target_path=args.existing_target,
            document_id=args.document_id,
            output_path=args.output,
            provider=args.provider,
            model=args.model,
            database_url=args.database_url
        ))
    except TranslationFailedError as e:
        print(f"❌ {e}. Nothing was translated, please retry.")
        sys.exit(1)
    except LLMError as e:
        print(f"❌ Translation service error: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
