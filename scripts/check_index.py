#!/usr/bin/env python3
"""Inspect the emoji collection and, optionally, run a similarity query."""
import sys
import os

# Add the parent directory to the path so we can import emojisync modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from emojisync.service import build_service
from emojisync.tokens import token_of


def check_index(query: str = None):
    """Print stored records and search hits."""
    service = build_service()
    store = service.index.store
    collection = service.settings.COLLECTION_NAME

    texts = store.get_texts(collection)
    print(f"🔍 Collection: {collection}")
    print(f"Records: {len(texts)}")
    print("-" * 60)
    for key, text in texts.items():
        preview = f"{text[:80]}..." if len(text) > 80 else text
        print(f"{key}  {token_of(text)}  {preview}")

    if query:
        result = service.find_similar(query)
        print(f"\n📚 Top matches for '{query}' ({result.method}):")
        if not result.hits:
            print("❌ No hits - has the index been rebuilt?")
        for hit in result.hits:
            print(f"  {hit.score:.3f}  {hit.text}")


if __name__ == "__main__":
    check_index(" ".join(sys.argv[1:]) or None)
