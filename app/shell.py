"""
ConversationShell - session state around the responder.

The shell owns the turn list, the text box contents, the speaker toggle, the
(display only) language and two platform speech collaborators. Every change
goes through one of its transition methods; typed text and voice transcripts
share the same send() path.

Usage:
    shell = ConversationShell(speech_in=mic, speech_out=tts)
    shell.start()                     # greets, speaks the greeting
    reply = shell.send("I feel hot and tired")
"""

import logging
from typing import List, Optional, Protocol

from app.prompts import LANGUAGES, UNSUPPORTED_VOICE_NOTICE
from app.responder import Reply, Turn, evaluate

logger = logging.getLogger("medassist")


class SpeechInput(Protocol):
    """Produces text from audio. The transcript arrives via on_transcript()."""

    @property
    def is_supported(self) -> bool: ...

    @property
    def is_listening(self) -> bool: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class SpeechOutput(Protocol):
    """Produces audio from text."""

    @property
    def is_speaking(self) -> bool: ...

    def speak(self, text: str) -> None: ...

    def stop(self) -> None: ...


class NullSpeechInput:
    is_supported = False
    is_listening = False

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass


class NullSpeechOutput:
    is_speaking = False

    def speak(self, text: str) -> None:
        pass

    def stop(self) -> None:
        pass


class ConversationShell:
    """One user session: turns, input box, speaker toggle, language and speech collaborators."""

    def __init__(
        self,
        speech_in: Optional[SpeechInput] = None,
        speech_out: Optional[SpeechOutput] = None,
        language: str = "en",
        speech_enabled: bool = True,
    ) -> None:
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {language!r}")
        self.speech_in: SpeechInput = speech_in or NullSpeechInput()
        self.speech_out: SpeechOutput = speech_out or NullSpeechOutput()
        self.language = language
        self.speech_enabled = speech_enabled
        self.input_text = ""
        self._messages: List[Turn] = []
        self.last_reply: Optional[Reply] = None

    @property
    def messages(self) -> List[Turn]:
        return list(self._messages)

    @property
    def is_listening(self) -> bool:
        return self.speech_in.is_listening

    @property
    def is_speaking(self) -> bool:
        return self.speech_out.is_speaking

    def start(self) -> str:
        greeting = evaluate("hello", [])
        self._messages = [Turn(role="assistant", content=greeting.text)]
        self.last_reply = greeting
        if self.speech_enabled:
            self.speech_out.speak(greeting.text)
        return greeting.text

    def set_language(self, code: str) -> str:
        if code not in LANGUAGES:
            raise ValueError(f"Unsupported language: {code!r}")
        self.language = code
        return self.start()

    def set_input(self, text: str) -> None:
        self.input_text = text

    def send(self, text: Optional[str] = None) -> Optional[str]:
        to_send = text or self.input_text.strip()
        if not to_send:
            return None

        self._messages.append(Turn(role="user", content=to_send))
        self.input_text = ""

        reply = evaluate(to_send, self._messages)
        self._messages.append(Turn(role="assistant", content=reply.text))
        self.last_reply = reply
        logger.info("Turn answered: kind=%s symptoms=%s diagnosis=%s", reply.kind, list(reply.symptoms), reply.diagnosis)

        if self.speech_enabled and not self.speech_out.is_speaking:
            self.speech_out.speak(reply.text)
        return reply.text

    def on_transcript(self, transcript: str) -> Optional[str]:
        """Speech recognition finished with transcript."""
        if not transcript or self.speech_in.is_listening:
            return None
        return self.send(transcript)

    def toggle_voice_input(self) -> Optional[str]:
        """Returns a notice when voice input is unavailable, else None."""
        if not self.speech_in.is_supported:
            return UNSUPPORTED_VOICE_NOTICE

        if self.speech_in.is_listening:
            self.speech_in.stop()
        else:
            if self.speech_out.is_speaking:
                self.speech_out.stop()
            self.speech_in.start()
        return None

    def toggle_speech(self) -> bool:
        self.speech_enabled = not self.speech_enabled
        if not self.speech_enabled and self.speech_out.is_speaking:
            self.speech_out.stop()
        return self.speech_enabled
