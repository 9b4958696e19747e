import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from errors import AllStreamsFailedError, ContentGenerationError
from models import STREAMS, AppInput, GenerationResult
from ppt_generator import render_pitch_deck
from status_store import StatusStore, utc_now_iso
from theme import resolve_palette


STREAM_LABELS = {
    "landing-page": "Landing Page",
    "pitch-deck": "Pitch Deck",
    "marketing": "Marketing",
}
RESULT_FIELDS = {
    "landing-page": "landingPage",
    "pitch-deck": "pitchDeck",
    "marketing": "marketing",
}
# Share of the progress bar covered by the three streams; rendering takes the rest.
STREAMS_PROGRESS_SHARE = 90


@dataclass
class GenerationOutcome:
    result: GenerationResult
    warnings: List[str] = field(default_factory=list)

    @property
    def status_code(self) -> int:
        return 207 if self.warnings else 200


def _failure_reason(error: BaseException) -> str:
    if isinstance(error, ContentGenerationError):
        return error.reason
    return str(error) or type(error).__name__


async def generate_all(
    app_input: AppInput,
    client,
    store: Optional[StatusStore] = None,
    project_id: Optional[str] = None,
    render: bool = True,
    today: Optional[str] = None,
) -> GenerationOutcome:
    """
    Runs the landing page, pitch deck and marketing streams concurrently.

    Every stream is awaited to completion whatever the others do. Failed streams
    leave a null slot and a warning; the call only raises when all of them fail.
    """
    project_id = project_id or str(uuid.uuid4())
    completed = 0

    def report(**fields):
        if store is not None:
            store.update(project_id, **fields)

    report(status="generating", progress=0, message="Starting generation")

    # Wall-clock bound per stream; the requests timeout covers each connect and read only.
    deadline = getattr(client, "timeout", None)

    async def run_stream(stream):
        nonlocal completed
        try:
            call = asyncio.to_thread(client.generate, stream, app_input, today)
            try:
                return await asyncio.wait_for(call, timeout=deadline)
            except asyncio.TimeoutError as e:
                raise ContentGenerationError(stream, f"Timed out after {deadline:g}s") from e
        finally:
            completed += 1
            report(
                status="generating",
                progress=completed * STREAMS_PROGRESS_SHARE // len(STREAMS),
                currentAgent=stream,
                message=f"{STREAM_LABELS[stream]} finished",
            )

    logging.info(f"Starting generation {project_id} for: {app_input.appName}")
    results = await asyncio.gather(*(run_stream(s) for s in STREAMS), return_exceptions=True)

    slots = {}
    warnings = []
    for stream, result in zip(STREAMS, results):
        if isinstance(result, BaseException):
            reason = _failure_reason(result)
            logging.error(f"{STREAM_LABELS[stream]} generation failed for {project_id}: {reason}")
            warnings.append(f"{STREAM_LABELS[stream]}: {reason}")
            slots[RESULT_FIELDS[stream]] = None
        else:
            slots[RESULT_FIELDS[stream]] = result

    if len(warnings) == len(STREAMS):
        report(status="error", progress=100, message="All agents failed to generate content")
        raise AllStreamsFailedError(warnings)

    if slots["pitchDeck"] is not None and app_input.brandColors:
        slots["pitchDeck"] = slots["pitchDeck"].model_copy(update={"brandColors": app_input.brandColors})

    if render and slots["pitchDeck"] is not None:
        brand = app_input.brandColors.model_dump() if app_input.brandColors else None
        slots["pitchDeck"] = await asyncio.to_thread(
            render_pitch_deck, slots["pitchDeck"], resolve_palette(brand)
        )

    result = GenerationResult(projectId=project_id, createdAt=utc_now_iso(), **slots)
    message = "Generation complete"
    if warnings:
        message = "Some content generated successfully, but some agents failed"
    report(status="completed", progress=100, message=message)
    logging.info(f"Finished generation {project_id} with {len(warnings)} failed stream(s)")
    return GenerationOutcome(result=result, warnings=warnings)
