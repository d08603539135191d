from .host_speech import HostSpeechRecognizer, HostSpeechSynthesizer
from .recognizer import SpeechRecognizer
from .synthesizer import SpeechSynthesizer

__all__ = ["HostSpeechRecognizer", "HostSpeechSynthesizer", "SpeechRecognizer", "SpeechSynthesizer"]
