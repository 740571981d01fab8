"""
Recipe Capture - Turn scanned or exported recipe text into structured drafts.

Sources:
- OCR transcripts (photographed cookbook pages, handwritten cards)
- CSV bulk exports
- Notion Markdown / CSV exports
- JSON payloads
"""

__version__ = "1.0.0"
