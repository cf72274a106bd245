import logging
import os
from typing import Any, List, Optional, Tuple

from google import genai
from google.genai import types
from openai import OpenAI

from . import config as _cfg
from .models import GroundingChunk, MapsSource, ReviewSnippet, WebSource
from .parser import ESTIMATED_COST_LABEL, OPENING_HOURS_LABEL, PRICE_CHECK_LINK_LABEL

logger = logging.getLogger(__name__)


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"
DEFAULT_DEEPSEEK_API_BASE = "https://api.deepseek.com"


class GenerationError(RuntimeError):
    """模型调用失败（网络、服务端或配置问题）。"""


def cfg_get(name: str, default=None):
    # 优先读取本地配置文件；为空则回退到环境变量
    if hasattr(_cfg, name):
        val = getattr(_cfg, name)
        if isinstance(val, str):
            if val.strip():
                return val.strip()
        elif val is not None:
            return val
    return os.environ.get(name, default)


def _provider() -> str:
    return (cfg_get("LLM_PROVIDER", "gemini") or "gemini").lower()


def _gemini_api_key() -> Optional[str]:
    return cfg_get("GEMINI_API_KEY") or cfg_get("API_KEY")


def _gemini_client_ok() -> bool:
    return bool(_gemini_api_key())


def _deepseek_client_ok() -> bool:
    return bool(cfg_get("DEEPSEEK_API_KEY"))


def _get_gemini_client():
    if not _gemini_client_ok():
        raise GenerationError("Gemini未配置，请在 config.py 填写 GEMINI_API_KEY 或设置环境变量。")
    timeout = cfg_get("GEMINI_TIMEOUT_SEC")
    if timeout:
        http_options = types.HttpOptions(timeout=int(float(timeout) * 1000))
        return genai.Client(api_key=_gemini_api_key(), http_options=http_options)
    return genai.Client(api_key=_gemini_api_key())


def _get_deepseek_client():
    if not _deepseek_client_ok():
        raise GenerationError("DeepSeek未配置，请在 config.py 填写 DEEPSEEK_API_KEY 或设置环境变量。")
    base_url = cfg_get("DEEPSEEK_API_BASE", DEFAULT_DEEPSEEK_API_BASE)
    return OpenAI(api_key=cfg_get("DEEPSEEK_API_KEY"), base_url=base_url)


def build_itinerary_prompt(destination: str, duration: int, interests: str) -> str:
    day_block = (
        "  ## Day {n}: [YYYY-MM-DD atau Deskripsi Hari]\n"
        "  - **[Waktu atau Urutan] [Nama Tempat/Aktivitas]**\n"
        "    - [Deskripsi Singkat Aktivitas/Tempat]\n"
        f"    - {OPENING_HOURS_LABEL}: [Jam Buka - Jam Tutup, e.g., 09:00 - 17:00]\n"
        f"    - {ESTIMATED_COST_LABEL}: [Mata Uang Lokal + Jumlah, e.g., IDR 50.000]\n"
        f"    - {PRICE_CHECK_LINK_LABEL}: [Nama Tiket/Pemesanan]\n"
    )
    return (
        "Anda adalah perencana perjalanan AI yang profesional, membantu, dan kreatif.\n"
        f"Buat rencana perjalanan harian yang terperinci untuk perjalanan ke {destination} selama {duration} hari.\n"
        f"Pertimbangkan minat saya: {interests}.\n"
        "Gunakan informasi terkini dan nyata untuk menyarankan aktivitas, tempat wisata, dan perkiraan biaya.\n"
        "Sertakan jam buka/tutup, perkiraan biaya dalam mata uang lokal (misalnya IDR 50.000), "
        f"dan \"{PRICE_CHECK_LINK_LABEL}: [Nama Produk/Layanan]\" sebagai placeholder untuk tombol.\n"
        "\n"
        "Format respons Anda secara *ketat* dalam Markdown berikut:\n"
        "\n"
        f"  # Rencana Perjalanan untuk {destination}\n"
        "\n"
        + day_block.format(n=1)
        + "\n"
        + day_block.format(n=2)
        + "\n"
        + f"  ...dan seterusnya untuk semua {duration} hari.\n"
    )


def _to_grounding_chunk(chunk: Any) -> GroundingChunk:
    # 引用信息原样透传，缺失字段用空串补齐
    web = getattr(chunk, "web", None)
    maps = getattr(chunk, "maps", None)
    web_source = None
    maps_source = None
    if web is not None:
        web_source = WebSource(uri=getattr(web, "uri", None) or "", title=getattr(web, "title", None) or "")
    if maps is not None:
        sources = getattr(maps, "place_answer_sources", None)
        snippets = []
        for s in (getattr(sources, "review_snippets", None) or []):
            uri = getattr(s, "uri", None) or getattr(s, "google_maps_uri", None) or ""
            snippets.append(ReviewSnippet(uri=uri, title=getattr(s, "title", None) or ""))
        maps_source = MapsSource(
            uri=getattr(maps, "uri", None) or "",
            title=getattr(maps, "title", None) or "",
            review_snippets=snippets,
        )
    return GroundingChunk(web=web_source, maps=maps_source)


def _extract_citations(response: Any) -> List[GroundingChunk]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    return [_to_grounding_chunk(c) for c in chunks]


def ask_gemini(prompt: str, model: Optional[str] = None) -> Tuple[str, List[GroundingChunk]]:
    client = _get_gemini_client()
    model = model or cfg_get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
    response = client.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        ),
    )
    return response.text or "", _extract_citations(response)


def ask_deepseek(prompt: str, model: Optional[str] = None, temperature: float = 0.5) -> str:
    client = _get_deepseek_client()
    model = model or cfg_get("DEEPSEEK_MODEL", DEFAULT_DEEPSEEK_MODEL)
    resp = client.chat.completions.create(
        model=model,
        temperature=temperature,
        messages=[{"role": "user", "content": prompt}],
    )
    return resp.choices[0].message.content or ""


def generate_itinerary_text(destination: str, duration: int, interests: str) -> Tuple[str, List[GroundingChunk]]:
    """调用模型生成 Markdown 行程，返回（原始文本, 引用来源）。只尝试一次。"""
    prompt = build_itinerary_prompt(destination, duration, interests)
    provider = _provider()
    try:
        if provider == "deepseek":
            # DeepSeek 不支持联网搜索，没有引用来源
            return ask_deepseek(prompt), []
        return ask_gemini(prompt)
    except GenerationError:
        raise
    except Exception as e:
        logger.exception("调用 %s 生成行程失败", provider)
        raise GenerationError(f"生成行程失败：{e}") from e
