#!/usr/bin/env python3
"""
Generate place embeddings

Reads active, approved places and writes the embedding snapshot used by
the search service. Afterwards call POST /index/reload on a running server.

Usage:
    python scripts/generate_embeddings.py
    python scripts/generate_embeddings.py --corpus places.json --output embeddings.json
"""

import sys

from ai_server.jobs.build_index import main

if __name__ == "__main__":
    sys.exit(main())
