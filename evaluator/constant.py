from enum import Enum


class Language(str, Enum):
    JAVA = 'java'


class FeedbackType(str, Enum):
    SUCCESS = 'success'
    WARNING = 'warning'
    INFO = 'info'


class SandboxBackend(str, Enum):
    LOCAL = 'local'
    DOCKER = 'docker'


SOURCE_EXTENSION = {
    Language.JAVA: '.java',
}
ARTIFACT_EXTENSION = {
    Language.JAVA: '.class',
}
