"""
素描生成API端点（轻路由）
负责参数验证、调用Handler、返回标准响应
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from sketchify.schemas.common import StandardResponse
from sketchify.schemas.sketch import SketchGenerationRequest
from sketchify.services.sketch.handler import SketchGenerationHandler

router = APIRouter(tags=["素描生成"])


def get_sketch_handler() -> SketchGenerationHandler:
    """每个请求使用独立的Handler"""
    return SketchGenerationHandler()


@router.get(
    "/options",  # 完整路径：/api/v1/sketch/options
    response_model=StandardResponse,
    summary="获取素描参数选项",
    description="返回可选的素描风格、线条粗细以及默认参数"
)
async def get_sketch_options(
    handler: SketchGenerationHandler = Depends(get_sketch_handler)
) -> StandardResponse:
    data = handler.handle_get_options()
    return StandardResponse(
        status="success",
        message="获取素描参数选项成功",
        data=data.model_dump(mode="json")
    )


@router.post(
    "/generate",
    response_model=StandardResponse,
    summary="生成素描",
    description="把上传的照片按所选风格、线条粗细和明暗程度转换为黑白素描"
)
async def generate_sketch(
    request: SketchGenerationRequest,
    handler: SketchGenerationHandler = Depends(get_sketch_handler)
) -> StandardResponse:
    """
    生成素描

    Args:
        request: 素描生成请求（Pydantic自动验证）
        handler: 素描生成处理器

    Returns:
        StandardResponse: data 为 SketchGenerationData（image_url 为 PNG data URL）
    """
    result = await handler.handle_generate(request)
    return StandardResponse(
        status="success",
        message="素描生成成功",
        data=handler.to_response_data(result).model_dump()
    )


@router.post(
    "/generate/download",
    summary="生成并下载素描",
    description="生成素描并以PNG附件形式返回",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}}
)
async def generate_sketch_download(
    request: SketchGenerationRequest,
    handler: SketchGenerationHandler = Depends(get_sketch_handler)
) -> Response:
    result = await handler.handle_generate(request)
    filename = f"sketch-{request.settings.style.value}.png"
    return Response(
        content=result.image_bytes(),
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
