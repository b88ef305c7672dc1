"""pdftoppm subprocess wrapper for splitting PDFs into page images."""
import asyncio
import logging
import re
from pathlib import Path
from typing import Awaitable, Callable, Optional

from packages.core.src.errors import ConversionError

from .config import PDFTOPPM_BIN, PDFTOPPM_DPI, PDFTOPPM_TIMEOUT, PAGE_PREFIX

logger = logging.getLogger(__name__)

# (document path, output directory) -> ordered page images
Splitter = Callable[[Path, Path], Awaitable[list[Path]]]

_PAGE_SUFFIX = re.compile(r"-(\d+)\.png$")


def page_number_from_filename(path: Path) -> Optional[int]:
    """pdftoppm 출력 파일명(page-07.png)에서 1부터 시작하는 페이지 번호를 읽는다."""
    match = _PAGE_SUFFIX.search(Path(path).name)
    return int(match.group(1)) if match else None


async def split_document(src: Path, output_dir: Path) -> list[Path]:
    """Render every page of a PDF to a PNG image.

    Args:
        src: Source PDF file path
        output_dir: Directory for the page images (created if absent)

    Returns:
        Page image paths in page order

    Raises:
        ConversionError: If pdftoppm fails, times out, or yields no pages
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    cmd = [
        PDFTOPPM_BIN,
        "-r",
        str(PDFTOPPM_DPI),
        "-png",
        str(src),
        str(output_dir / PAGE_PREFIX),
    ]
    logger.info("pdftoppm 실행: cmd=%s", " ".join(cmd))

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except FileNotFoundError as exc:
        raise ConversionError(f"pdftoppm 실행 파일이 없습니다: {PDFTOPPM_BIN}") from exc

    try:
        stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=PDFTOPPM_TIMEOUT)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise ConversionError(f"PDF 변환 시간 초과: {src}")

    if proc.returncode != 0:
        out = stdout.decode(errors="ignore") if stdout else ""
        logger.error("PDF 변환 실패 rc=%s output=%s", proc.returncode, out)
        raise ConversionError(f"PDF 변환 실패: {src}")

    # pdftoppm은 페이지 번호를 0으로 채우므로 사전순 정렬 = 페이지 순서
    pages = sorted(output_dir.glob(f"{PAGE_PREFIX}*.png"))
    if not pages:
        raise ConversionError(f"PDF에서 추출된 페이지가 없습니다: {src}")

    logger.info("PDF 변환 성공: %s -> %d pages", src, len(pages))
    return pages
