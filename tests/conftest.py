"""Pytest configuration for the itinerary planner project."""
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so that itinerary_agent and web_app import under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


SAMPLE_MARKDOWN = """
# Rencana Perjalanan untuk Yogyakarta

## Day 1: 2024-05-10
- **09:00 Kraton Yogyakarta**
  - Istana resmi Kesultanan Yogyakarta.
  - Jam Buka/Tutup: 08:30 - 14:00
  - Estimasi Biaya: IDR 15.000
  - Link Cek Harga: Tiket Kraton
- **13:00 Taman Sari**: bekas taman istana
  - Jam Buka/Tutup: 09:00 - 15:00
  - Estimasi Biaya: IDR 5.000

## Day 2: Hari kedua, candi
- **05:00 Sunrise Borobudur**
  - Estimasi Biaya: IDR 375.000
  - Link Cek Harga: Borobudur Sunrise
"""


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN
