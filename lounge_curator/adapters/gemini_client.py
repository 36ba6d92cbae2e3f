"""Gemini AI client adapter.

Google Gen AI SDK의 비동기(aio) 인터페이스를 사용한 Gemini API 래퍼.
관련성 스코어링과 다이제스트 큐레이션 오라클이 모두 이 클라이언트를 거칩니다.
"""

import json
from typing import Any

from google import genai
from google.genai import types


class OracleResponseError(ValueError):
    """오라클 응답을 JSON으로 해석할 수 없을 때."""


class GeminiClient:
    """Gemini API 클라이언트.

    google-genai SDK를 사용하여 Gemini 모델과 통신합니다.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
    ) -> None:
        """Initialize Gemini client.

        Args:
            api_key: Google API 키.
            model: 기본 Gemini 모델.
        """
        self._client = genai.Client(api_key=api_key)
        self.model = model

    async def generate_content(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        model: str | None = None,
        use_search: bool = False,
    ) -> str:
        """텍스트 생성.

        Args:
            prompt: 사용자 프롬프트.
            system_prompt: 시스템 프롬프트 (선택).
            temperature: 생성 온도 (0.0~1.0).
            model: 이번 호출에만 사용할 모델 (없으면 기본 모델).
            use_search: Google Search grounding 사용 여부.

        Returns:
            생성된 텍스트.
        """
        tools = [types.Tool(google_search=types.GoogleSearch())] if use_search else None
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_prompt,
            tools=tools,
        )

        response = await self._client.aio.models.generate_content(
            model=model or self.model,
            contents=prompt,
            config=config,
        )

        return response.text or ""

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_retries: int = 1,
        temperature: float = 0.3,
        model: str | None = None,
        use_search: bool = False,
    ) -> dict[str, Any]:
        """JSON 응답 생성.

        마크다운 래퍼(```json ... ```)나 앞뒤 설명문을 자동으로 제거합니다.

        Args:
            prompt: 사용자 프롬프트.
            system_prompt: 시스템 프롬프트 (선택).
            max_retries: JSON 파싱 실패 시 시도 횟수.
            temperature: 생성 온도.
            model: 이번 호출에만 사용할 모델.
            use_search: Google Search grounding 사용 여부.

        Returns:
            파싱된 JSON dict.

        Raises:
            OracleResponseError: JSON 파싱 실패.
        """
        last_error: Exception | None = None

        for attempt in range(max_retries):
            retry_prompt = prompt
            if attempt > 0:
                retry_prompt = (
                    f"{prompt}\n\n"
                    "IMPORTANT: Respond with valid JSON only. "
                    "Do not include any explanation or markdown."
                )

            text = await self.generate_content(
                prompt=retry_prompt,
                system_prompt=system_prompt,
                temperature=temperature,
                model=model,
                use_search=use_search,
            )

            try:
                return self._parse_json(text)
            except OracleResponseError as e:
                last_error = e
                continue

        raise OracleResponseError(
            f"Failed to parse JSON after {max_retries} attempts: {last_error}"
        )

    def _parse_json(self, text: str) -> dict[str, Any]:
        """텍스트에서 JSON 객체 파싱.

        전체가 JSON이 아니면 첫 '{'부터 마지막 '}'까지를 잘라 다시 시도합니다.

        Args:
            text: 파싱할 텍스트.

        Returns:
            파싱된 dict.

        Raises:
            OracleResponseError: JSON 객체를 찾거나 해석할 수 없음.
        """
        text = text.strip()
        if text.startswith("```"):
            lines = text.split("\n")[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines)

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            start = text.find("{")
            end = text.rfind("}")
            if start == -1 or end <= start:
                raise OracleResponseError(
                    f"No JSON object in response: {text[:200]}"
                ) from None
            try:
                parsed = json.loads(text[start : end + 1])
            except json.JSONDecodeError as e:
                raise OracleResponseError(f"Invalid JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise OracleResponseError(
                f"Expected JSON object, got {type(parsed).__name__}"
            )
        return parsed
