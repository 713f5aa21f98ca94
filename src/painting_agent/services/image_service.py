"""
图片生成服务 - 调用 OpenAI 生图接口，带模型回退
"""
import asyncio
import base64
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import requests

from painting_agent.core import Settings, get_settings, get_logger, log_elapsed
from painting_agent.core.exceptions import (
    UpstreamDataError,
    UpstreamError,
    UpstreamNetworkError,
    ValidationError,
    error_for_status,
)
from painting_agent.models import PaintingStatus, ReferenceImage
from painting_agent.services.record_service import RecordService, get_record_service
from painting_agent.services.temp_files import TempFileManager

logger = get_logger(__name__)

ERROR_MESSAGE_LIMIT = 255
REFERENCE_NOTICE = "(inspired by provided reference images)"


@dataclass(frozen=True)
class ImageTier:
    """回退链中的一档模型"""
    model: str
    size: str = "1024x1024"
    quality: Optional[str] = None
    max_prompt_length: Optional[int] = None

    def build_payload(self, prompt: str) -> dict:
        prompt = prompt.strip()
        if self.max_prompt_length:
            prompt = prompt[: self.max_prompt_length]
        payload = {
            "model": self.model,
            "prompt": prompt,
            "size": self.size,
            "response_format": "b64_json",
        }
        if self.quality:
            payload["quality"] = self.quality
        return payload


# 按顺序尝试，首个成功即停止
DEFAULT_TIERS: tuple[ImageTier, ...] = (
    ImageTier(model="dall-e-3", quality="hd"),
    ImageTier(model="dall-e-2", max_prompt_length=1000),
)


def _split_data_url(data_url: str) -> Optional[str]:
    """取出 data URL 中的 base64 部分"""
    parts = (data_url or "").split(",", 1)
    if len(parts) != 2 or not parts[1]:
        return None
    return parts[1]


def _response_error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or ""
    return json.dumps(body, ensure_ascii=False)[:200]


class ImageService:
    """图片生成服务"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        records: Optional[RecordService] = None,
        tiers: Sequence[ImageTier] = DEFAULT_TIERS,
    ):
        self.settings = settings or get_settings()
        self.records = records or get_record_service()
        self.tiers = tuple(tiers)
        self.uploads_dir = Path(self.settings.uploads_dir)
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    def _validate(self, idea_id: int, prompt: str) -> None:
        if not idea_id:
            raise ValidationError("Idea ID is required for image generation")
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt is required for image generation")
        self.settings.require_openai_key()

    async def _stage_reference_images(
        self,
        references: Sequence[ReferenceImage],
        temp_files: TempFileManager,
    ) -> list[Path]:
        """
        将参考图解码为临时文件

        每张参考图独立处理，单张失败只记录日志并跳过
        """
        logger.info(f"处理 {len(references)} 张参考图")

        async def stage(index: int, ref: ReferenceImage) -> Optional[Path]:
            payload = _split_data_url(ref.image_data)
            if not payload:
                logger.warning(f"参考图 {index} 的 base64 数据无效，已跳过")
                return None
            try:
                return await temp_files.create_temp_file(payload, prefix=f"ref_{index}")
            except Exception as e:
                logger.error(f"处理参考图 {index} 失败: {e}")
                return None

        results = await asyncio.gather(
            *(stage(i, ref) for i, ref in enumerate(references)),
            return_exceptions=True,
        )
        return [path for path in results if isinstance(path, Path)]

    async def _request_generation(self, tier: ImageTier, prompt: str) -> dict:
        """调用一档模型，只发一次请求"""
        url = f"{self.settings.openai_base_url}/images/generations"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.openai_api_key}",
        }
        payload = tier.build_payload(prompt)

        started = time.perf_counter()
        try:
            response = await asyncio.to_thread(
                requests.post,
                url,
                headers=headers,
                json=payload,
                timeout=self.settings.image_request_timeout,
            )
        except requests.RequestException as e:
            raise UpstreamNetworkError(
                "No response received from OpenAI API - check your internet connection"
            ) from e

        logger.info(
            f"{tier.model} 接口返回 {response.status_code} "
            f"({(time.perf_counter() - started) * 1000:.0f}ms)"
        )
        if response.status_code >= 400:
            raise error_for_status(response.status_code, _response_error_detail(response))

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamDataError("Malformed JSON in image generation response") from e
        if not isinstance(data, dict):
            raise UpstreamDataError("Unexpected image generation response shape")
        if "error" in data:
            raise UpstreamDataError(f"API错误: {data['error']}")
        return data

    async def _generate_with_fallback(self, prompt: str) -> dict:
        """按顺序尝试各档模型，鉴权/权限/请求错误立即中止"""
        last_error: Optional[UpstreamError] = None
        for tier in self.tiers:
            try:
                logger.info(f"使用 {tier.model} 生成图片")
                data = await self._request_generation(tier, prompt)
                logger.info(f"{tier.model} 生成成功")
                return data
            except UpstreamError as e:
                if e.is_terminal:
                    raise
                logger.warning(f"{tier.model} 失败: {e}")
                last_error = e

        if last_error is not None:
            raise last_error
        raise UpstreamError("All image generation models failed")

    async def _extract_image_data(self, data: dict) -> str:
        """取出 base64 图片：优先内联数据，否则下载 URL"""
        items = data.get("data") or []
        if not items or not isinstance(items[0], dict):
            raise UpstreamDataError("No image data in API response")

        image_result = items[0]
        if image_result.get("b64_json"):
            return image_result["b64_json"]

        if image_result.get("url"):
            logger.info("从 URL 下载图片...")
            try:
                with log_elapsed(logger, "图片下载完成"):
                    response = await asyncio.to_thread(
                        requests.get,
                        image_result["url"],
                        timeout=self.settings.image_download_timeout,
                    )
            except requests.RequestException as e:
                raise UpstreamNetworkError(f"Failed to download generated image: {e}") from e
            if response.status_code >= 400:
                raise error_for_status(response.status_code, "image download failed")

            return base64.b64encode(response.content).decode("ascii")

        raise UpstreamDataError("No valid image data found in API response")

    async def _save_image_file(self, idea_id: int, image_data: str) -> str:
        """写入上传目录，返回文件名"""
        file_name = f"painting_{idea_id}_{time.time_ns()}.png"
        path = self.uploads_dir / file_name
        await asyncio.to_thread(path.write_bytes, base64.b64decode(image_data))
        logger.info(f"图片已保存: {path}")
        return file_name

    def _mark_failed(self, idea_id: int, error: Exception) -> None:
        message = str(error) or "Unknown error"
        try:
            self.records.update_painting_status(
                idea_id,
                PaintingStatus.FAILED,
                error_message=message[:ERROR_MESSAGE_LIMIT],
                image_url=None,
                image_data=None,
            )
            logger.info(f"已更新失败状态: idea_id={idea_id}")
        except Exception:
            logger.error("更新失败状态时发生异常", exc_info=True)

    async def generate_image(
        self,
        idea_id: int,
        prompt: str,
        references: Optional[Sequence[ReferenceImage]] = None,
    ) -> dict:
        """
        生成图片并更新绘画记录

        Args:
            idea_id: 创意ID
            prompt: 生图提示词
            references: 参考图（当前模型均不支持，仅在提示词中注明）

        Returns:
            {"idea_id", "image_url", "status"}
        """
        self._validate(idea_id, prompt)
        references = list(references or [])
        logger.info(f"开始生成图片，idea_id={idea_id}, 参考图 {len(references)} 张")

        temp_files = TempFileManager(self.uploads_dir)
        try:
            self.records.update_painting_status(
                idea_id, PaintingStatus.PROCESSING, error_message=None
            )

            generation_prompt = prompt
            if references:
                staged = await self._stage_reference_images(references, temp_files)
                logger.info(f"参考图已暂存 {len(staged)} 张，当前模型不支持参考图，改为文本提示")
                generation_prompt = f"{prompt} {REFERENCE_NOTICE}"

            data = await self._generate_with_fallback(generation_prompt)
            image_data = await self._extract_image_data(data)
            file_name = await self._save_image_file(idea_id, image_data)

            reference_ids = [ref.id for ref in references if ref.id is not None]
            image_url = f"{self.settings.uploads_url_prefix}/{file_name}"
            self.records.update_painting_status(
                idea_id,
                PaintingStatus.COMPLETED,
                image_url=image_url,
                image_data=f"data:image/png;base64,{image_data}",
                used_reference_ids=json.dumps(reference_ids) if reference_ids else None,
                error_message=None,
            )

            logger.info(f"图片生成完成: idea_id={idea_id}")
            return {
                "idea_id": idea_id,
                "image_url": image_url,
                "status": PaintingStatus.COMPLETED.value,
            }

        except Exception as e:
            logger.error(f"图片生成失败 idea_id={idea_id}: {e}", exc_info=True)
            self._mark_failed(idea_id, e)
            raise
        finally:
            await temp_files.cleanup()


# 全局单例
_image_service: Optional[ImageService] = None


def get_image_service() -> ImageService:
    """获取图片生成服务单例"""
    global _image_service
    if _image_service is None:
        _image_service = ImageService()
    return _image_service
