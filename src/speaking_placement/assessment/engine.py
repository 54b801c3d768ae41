"""Assessment coordinator: runs the analyzers and combines their results."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import structlog

from speaking_placement.assessment.combiner import ScoreCombiner
from speaking_placement.assessment.content import analyze_content
from speaking_placement.assessment.grammar import analyze_grammar
from speaking_placement.assessment.sources import TranscriptionResult, TranscriptionSource
from speaking_placement.assessment.vocabulary import analyze_vocabulary
from speaking_placement.audio.decoder import AudioClip, decode_audio
from speaking_placement.audio.metrics import estimate_audio_metrics
from speaking_placement.config import Settings, get_settings
from speaking_placement.models.assessment import (
    DIMENSIONS,
    AudioMetrics,
    ResponseAssessment,
    ScoringParameters,
)
from speaking_placement.models.section import SectionId

logger = structlog.get_logger()

AudioBuffer = AudioClip | bytes | bytearray
Transcript = str | TranscriptionResult | None

# One thread per concurrent analyzer branch
ANALYZER_WORKERS = 4
AUDIO_DIMENSIONS = ("pronunciation", "fluency")


def _transcript_text(transcript: Transcript) -> str:
    if transcript is None:
        return ""
    if isinstance(transcript, TranscriptionResult):
        return transcript.text
    return str(transcript)


class AssessmentEngine:
    """Scores one spoken response at a time.

    Grammar, vocabulary, content and audio analysis run concurrently, each
    with a bounded timeout. A branch that fails or times out is replaced by
    its fallback; it never fails the whole assessment.

    Args:
        settings: Timeouts and audio thresholds.
        combiner: Score combiner (pronunciation sources are configured there).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        combiner: ScoreCombiner | None = None,
    ):
        self.settings = settings or get_settings()
        self.combiner = combiner or ScoreCombiner()
        self._executor = ThreadPoolExecutor(
            max_workers=ANALYZER_WORKERS, thread_name_prefix="placement-analyzer"
        )

    def close(self) -> None:
        """Release worker threads without waiting for analyzers still running."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    async def _run(self, fn, *args, timeout: float):
        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(
            loop.run_in_executor(self._executor, fn, *args), timeout=timeout
        )

    def _measure_audio(self, buffer: AudioBuffer) -> AudioMetrics:
        clip = decode_audio(buffer)
        return estimate_audio_metrics(clip, self.settings)

    async def _analyze_audio(self, buffer: AudioBuffer | None) -> AudioMetrics | None:
        if buffer is None:
            return None
        return await self._run(
            self._measure_audio, buffer, timeout=self.settings.audio_timeout_seconds
        )

    async def assess_detailed(
        self,
        section: SectionId | str | None,
        transcript: Transcript,
        audio_buffer: AudioBuffer | None = None,
        expected_answer: str | None = None,
        question: str | None = None,
    ) -> ResponseAssessment:
        """Assess a response and keep the intermediate analyses.

        Args:
            section: Section id (A-G); unknown ids use generic completeness.
            transcript: Recognized text, possibly empty.
            audio_buffer: Optional recording (decoded clip or encoded bytes).
            expected_answer: Optional hint describing anticipated content.
            question: Question text, recorded in logs for context.

        Returns:
            ResponseAssessment whose parameters are always complete and clamped.
        """
        text = _transcript_text(transcript)
        log = logger.bind(section=str(section), question=question)
        try:
            timeout = self.settings.analysis_timeout_seconds
            branches = ("grammar", "vocabulary", "content", "audio")
            results = await asyncio.gather(
                self._run(analyze_grammar, text, timeout=timeout),
                self._run(analyze_vocabulary, text, timeout=timeout),
                self._run(analyze_content, text, expected_answer, section, timeout=timeout),
                self._analyze_audio(audio_buffer),
                return_exceptions=True,
            )

            settled = {}
            for name, result in zip(branches, results, strict=True):
                if isinstance(result, BaseException):
                    if isinstance(result, (asyncio.TimeoutError, TimeoutError)):
                        log.warning("analyzer_timed_out", analyzer=name)
                    else:
                        log.warning("analyzer_failed", analyzer=name, error=str(result))
                    settled[name] = None
                else:
                    settled[name] = result

            parameters, fallbacks = self.combiner.combine(
                text,
                grammar=settled["grammar"],
                vocabulary=settled["vocabulary"],
                content=settled["content"],
                audio=settled["audio"],
            )
            if audio_buffer is not None and settled["audio"] is None:
                # Audio was supplied but could not be measured
                fallbacks.extend(d for d in AUDIO_DIMENSIONS if d not in fallbacks)
            assessment = ResponseAssessment(
                parameters=parameters,
                grammar=settled["grammar"],
                vocabulary=settled["vocabulary"],
                content=settled["content"],
                audio=settled["audio"],
                fallbacks=fallbacks,
            )
        except Exception:
            log.exception("assessment_failed")
            assessment = ResponseAssessment(
                parameters=self._last_resort(text), fallbacks=list(DIMENSIONS)
            )

        log.info(
            "response_assessed",
            **assessment.parameters.as_dict(),
            fallbacks=assessment.fallbacks,
        )
        return assessment

    def _last_resort(self, text: str) -> ScoringParameters:
        try:
            return self.combiner.fallback_parameters(text)
        except Exception:
            logger.exception("fallback_assessment_failed")
            return ScoringParameters(
                fluency=50, pronunciation=50, grammar=50, vocabulary=50, comprehension=50
            )

    async def assess(
        self,
        section: SectionId | str | None,
        transcript: Transcript,
        audio_buffer: AudioBuffer | None = None,
        expected_answer: str | None = None,
        question: str | None = None,
    ) -> ScoringParameters:
        """Assess a response; see assess_detailed."""
        assessment = await self.assess_detailed(
            section, transcript, audio_buffer, expected_answer, question
        )
        return assessment.parameters

    async def assess_recording(
        self,
        section: SectionId | str | None,
        audio_buffer: AudioBuffer,
        transcriber: TranscriptionSource,
        expected_answer: str | None = None,
        question: str | None = None,
    ) -> ResponseAssessment:
        """Transcribe a recording through a transcription source, then assess it.

        A decode or transcription failure leaves an empty transcript; the
        assessment still completes, with the audio dimensions reported as
        fallbacks when the recording could not be decoded.
        """
        clip: AudioClip | None = None
        transcript = TranscriptionResult()
        try:
            clip = await self._run(
                decode_audio, audio_buffer, timeout=self.settings.audio_timeout_seconds
            )
            transcript = await asyncio.wait_for(
                transcriber.transcribe(clip), timeout=self.settings.audio_timeout_seconds
            )
        except Exception as e:
            logger.warning(
                "transcription_failed",
                source=type(transcriber).__name__,
                error=str(e) or type(e).__name__,
            )
        audio = clip if clip is not None else audio_buffer
        return await self.assess_detailed(section, transcript, audio, expected_answer, question)


async def assess_response_async(
    section: SectionId | str | None,
    transcript: Transcript,
    audio_buffer: AudioBuffer | None = None,
    expected_answer: str | None = None,
    question: str | None = None,
) -> ScoringParameters:
    """Async entry point; never raises."""
    try:
        engine = AssessmentEngine()
    except Exception:
        logger.exception("engine_init_failed")
        return ScoreCombiner().fallback_parameters(_transcript_text(transcript))
    try:
        return await engine.assess(section, transcript, audio_buffer, expected_answer, question)
    finally:
        engine.close()


def _response_deadline() -> float:
    """Upper bound on one assessment: the slowest branch plus a grace second."""
    settings = get_settings()
    return settings.analysis_timeout_seconds + settings.audio_timeout_seconds + 1.0


def assess_response(
    section: SectionId | str | None,
    transcript: Transcript,
    audio_buffer: AudioBuffer | None = None,
    expected_answer: str | None = None,
    question: str | None = None,
) -> ScoringParameters:
    """Score one response.

    Synchronous entry point; safe to call with or without a running event
    loop and never raises. Returns within the configured timeouts even when
    an analyzer hangs.

    Args:
        section: Section id (A-G).
        transcript: Recognized text, possibly empty.
        audio_buffer: Optional recording.
        expected_answer: Optional expected-content hint.
        question: Optional question text.

    Returns:
        Complete ScoringParameters with every field in [0, 100].
    """
    def run() -> ScoringParameters:
        return asyncio.run(
            assess_response_async(section, transcript, audio_buffer, expected_answer, question)
        )

    try:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return run()
        # Already inside an event loop: run on a private loop in a worker thread
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="placement-sync")
        try:
            return pool.submit(run).result(timeout=_response_deadline())
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
    except Exception:
        logger.exception("assess_response_failed")
        return ScoreCombiner().fallback_parameters(_transcript_text(transcript))
