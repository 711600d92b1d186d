"""
素描提示词构建

根据素描参数拼接发给图片模型的英文指令。纯函数：相同输入得到相同输出，
不做任何 I/O，也不会抛出异常。

拼接顺序固定：
    1. 前置指令（黑白艺术素描，保持构图）
    2. 风格子句（未知风格不追加）
    3. 线条子句（未知线条粗细不追加）
    4. 明暗子句（darkness < 30 明亮；> 70 高对比；30-70 不追加）
    5. 结尾指令（只输出转换后的图片）
"""

from typing import Dict, Optional, Union

from sketchify.core.sketch.models import LineWeight, SketchSettings, SketchStyle

PROMPT_PREAMBLE = "Turn this image into a high-quality black and white artistic sketch. "

PROMPT_CLOSING = "Output only the transformed image. Do not change the composition, only the style."

STYLE_CLAUSES: Dict[SketchStyle, str] = {
    SketchStyle.PENCIL: "Style: Graphite pencil sketch with soft shading and realistic textures. ",
    SketchStyle.CHARCOAL: "Style: Charcoal drawing with deep blacks, smudged shadows, and rough textures. ",
    SketchStyle.INK: "Style: High-contrast ink pen drawing with sharp, confident lines. ",
    SketchStyle.MINIMALIST: "Style: Minimalist continuous line art. Simple and abstract. ",
    SketchStyle.STIPPLE: "Style: Stippling technique (dotwork) shading. ",
    SketchStyle.CROSSHATCH: "Style: Classic cross-hatching shading. ",
}

LINE_WEIGHT_CLAUSES: Dict[LineWeight, str] = {
    LineWeight.THIN: "Lines: Very fine, delicate, and precise. ",
    LineWeight.MEDIUM: "Lines: Balanced weight. ",
    LineWeight.THICK: "Lines: Bold, thick, and heavy strokes. ",
}

LIGHT_TONE_CLAUSE = "Tone: Light and airy, high key, lots of white space. "
DARK_TONE_CLAUSE = "Tone: High contrast, low key, heavy dark areas. "

LIGHT_TONE_THRESHOLD = 30
DARK_TONE_THRESHOLD = 70


def _coerce_style(style: Union[SketchStyle, str, None]) -> Optional[SketchStyle]:
    try:
        return SketchStyle(style)
    except ValueError:
        return None


def _coerce_line_weight(line_weight: Union[LineWeight, str, None]) -> Optional[LineWeight]:
    try:
        return LineWeight(line_weight)
    except ValueError:
        return None


def tone_clause(darkness: int) -> str:
    """根据明暗程度选择明暗子句，中间区间返回空字符串"""
    if darkness < LIGHT_TONE_THRESHOLD:
        return LIGHT_TONE_CLAUSE
    if darkness > DARK_TONE_THRESHOLD:
        return DARK_TONE_CLAUSE
    return ""


def build_sketch_prompt(settings: SketchSettings) -> str:
    """
    构建素描提示词

    Args:
        settings: 素描参数

    Returns:
        str: 完整提示词
    """
    style = _coerce_style(settings.style)
    line_weight = _coerce_line_weight(settings.line_weight)

    return (
        PROMPT_PREAMBLE
        + STYLE_CLAUSES.get(style, "")
        + LINE_WEIGHT_CLAUSES.get(line_weight, "")
        + tone_clause(settings.darkness)
        + PROMPT_CLOSING
    )
