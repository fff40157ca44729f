"""
Qualitative feedback on a submitted Java source.

Each rule is an independent function taking a :class:`JavaSource` and
returning at most one :class:`QualityFeedback`. ``QUALITY_RULES`` fixes the
order in which they are reported; a summary item is appended at the end.
"""

from typing import Callable, Iterable, List, Optional

from .constant import FeedbackType
from .java_source import JavaSource
from .models import QualityFeedback

FeedbackRule = Callable[[JavaSource], Optional[QualityFeedback]]

DOCUMENTATION = 'Documentation'
STRUCTURE = 'Structure'
DESIGN = 'Design'
ERROR_HANDLING = 'Error Handling'
ROBUSTNESS = 'Robustness'
STYLE = 'Style'
MODERN_JAVA = 'Modern Java'
SUMMARY = 'Summary'


def _success(message, details, category) -> QualityFeedback:
    return QualityFeedback(type=FeedbackType.SUCCESS,
                           message=message,
                           details=details,
                           category=category)


def _warning(message, details, category) -> QualityFeedback:
    return QualityFeedback(type=FeedbackType.WARNING,
                           message=message,
                           details=details,
                           category=category)


def _info(message, details, category) -> QualityFeedback:
    return QualityFeedback(type=FeedbackType.INFO,
                           message=message,
                           details=details,
                           category=category)


def class_documentation(src: JavaSource) -> Optional[QualityFeedback]:
    if src.has_class_doc:
        return _success(
            'Excellent class documentation',
            'Your code includes clear Javadoc for the class, which greatly '
            'helps others understand its purpose and usage.',
            DOCUMENTATION,
        )
    if 'public class' in src:
        return _warning(
            'Missing class Javadoc',
            'Adding proper Javadoc comments to your class would improve code '
            'documentation. Include a class description, author, and version '
            'information.',
            DOCUMENTATION,
        )
    return None


def method_documentation(src: JavaSource) -> Optional[QualityFeedback]:
    declared = src.method_count
    documented = src.documented_method_count
    coverage = documented / declared if declared > 0 else 0
    if coverage >= 0.8:
        return _success(
            'Comprehensive method documentation',
            f"You've documented {documented} out of {declared} methods with "
            'proper Javadoc, which aids code maintainability.',
            DOCUMENTATION,
        )
    if coverage > 0:
        return _info(
            'Partial method documentation',
            f'Only {documented} out of {declared} methods have Javadoc '
            'comments. Consider documenting all methods.',
            DOCUMENTATION,
        )
    if declared > 0:
        return _warning(
            'Missing method documentation',
            'None of your methods have Javadoc comments. Adding @param, '
            '@return, and @throws tags to methods greatly improves code '
            'readability.',
            DOCUMENTATION,
        )
    return None


def inline_comments(src: JavaSource) -> Optional[QualityFeedback]:
    ratio = src.inline_comment_count / src.line_count
    if ratio > 0.15:
        return _success(
            'Good use of inline comments',
            'Your code has a healthy amount of inline comments explaining '
            'implementation details.',
            DOCUMENTATION,
        )
    if ratio < 0.05 and src.line_count > 30:
        return _info(
            'Consider adding more inline comments',
            'Complex code sections could benefit from more inline comments '
            'explaining the "why" behind your implementation.',
            DOCUMENTATION,
        )
    return None


def method_length(src: JavaSource) -> Optional[QualityFeedback]:
    lengths = src.method_lengths
    long_methods = [length for length in lengths if length > 30]
    if long_methods:
        return _warning(
            'Methods are too long',
            f'You have {len(long_methods)} method(s) with more than 30 lines. '
            'Consider breaking them into smaller, more focused methods with '
            'single responsibilities.',
            STRUCTURE,
        )
    if lengths and all(length < 20 for length in lengths):
        return _success(
            'Well-sized methods',
            'Your methods are concise and focused, which improves readability '
            'and maintainability.',
            STRUCTURE,
        )
    return None


def encapsulation(src: JavaSource) -> Optional[QualityFeedback]:
    private_fields = src.private_field_count
    public_fields = src.public_field_count
    if public_fields > 0 and private_fields == 0:
        return _warning(
            'Poor encapsulation',
            'You have public fields but no private fields. Consider making '
            'fields private and providing accessor methods to improve '
            'encapsulation.',
            STRUCTURE,
        )
    if private_fields > 0 and public_fields == 0:
        return _success(
            'Good encapsulation',
            'Your fields are properly encapsulated as private with controlled '
            'access, which is a best practice in OOP.',
            STRUCTURE,
        )
    return None


def object_oriented_design(src: JavaSource) -> Optional[QualityFeedback]:
    uses_interfaces = src.contains_any('interface ', 'implements ')
    uses_inheritance = 'extends ' in src
    if not (uses_interfaces or uses_inheritance):
        return None
    used = ' and '.join(
        name for name, flag in (('interfaces', uses_interfaces),
                                ('inheritance', uses_inheritance)) if flag)
    return _success(
        'Good object-oriented design',
        f"You're using {used} to create a flexible and extensible design.",
        DESIGN,
    )


def exception_handling(src: JavaSource) -> Optional[QualityFeedback]:
    if src.try_catch_count > 0:
        empty = src.empty_catch_count
        if empty > 0:
            return _warning(
                'Empty catch blocks',
                f'You have {empty} empty catch block(s). Empty catch blocks '
                'suppress exceptions without handling them, which can hide '
                'errors.',
                ERROR_HANDLING,
            )
        return _success(
            'Good exception handling',
            'Your code includes proper try-catch blocks that handle '
            'exceptions meaningfully.',
            ERROR_HANDLING,
        )
    if 'throws ' in src:
        return _info(
            'Declared exceptions without handling',
            "Your methods declare exceptions but don't handle them "
            'internally. Consider adding try-catch blocks for more robust '
            'error handling.',
            ERROR_HANDLING,
        )
    if src.method_count > 1:
        return _info(
            'Consider adding error handling',
            "Your code doesn't have any exception handling. Consider adding "
            'try-catch blocks for operations that might fail (I/O, parsing, '
            'etc.).',
            ERROR_HANDLING,
        )
    return None


def input_validation(src: JavaSource) -> Optional[QualityFeedback]:
    if src.method_count == 0:
        return None
    if src.has_null_checks:
        return _success(
            'Good input validation',
            'Your code checks for null values and validates input, which '
            'helps prevent unexpected behavior.',
            ROBUSTNESS,
        )
    return _info(
        'Consider adding input validation',
        'Your code could benefit from null checks and input validation to '
        'prevent potential errors.',
        ROBUSTNESS,
    )


def naming_conventions(src: JavaSource) -> Optional[QualityFeedback]:
    camel = src.camel_case_count
    snake = src.snake_case_count
    if snake > 2 and camel > 0:
        return _warning(
            'Inconsistent naming conventions',
            'Your code mixes camelCase and snake_case naming conventions. '
            'Stick to camelCase for Java variables and methods for '
            'consistency.',
            STYLE,
        )
    if camel > 0 and snake == 0:
        return _success(
            'Consistent naming conventions',
            'Your code follows consistent camelCase naming conventions, which '
            'is the standard in Java.',
            STYLE,
        )
    return None


def code_duplication(src: JavaSource) -> Optional[QualityFeedback]:
    if src.duplicated_block_count == 0:
        return None
    return _warning(
        'Potential code duplication',
        'There appear to be duplicated code blocks in your solution. '
        'Consider extracting common functionality into reusable methods.',
        STYLE,
    )


def modern_java_features(src: JavaSource) -> Optional[QualityFeedback]:
    features = [
        name for name, used in (
            ('Streams', src.contains_any('.stream()', 'Stream.')),
            ('Lambdas', '->' in src),
            ('Optionals', src.contains_any('Optional<', 'Optional.')),
        ) if used
    ]
    if not features:
        return None
    return _success(
        'Using modern Java features',
        f"You're utilizing modern Java features like {', '.join(features)}, "
        'which improves code readability and expressiveness.',
        MODERN_JAVA,
    )


QUALITY_RULES: List[FeedbackRule] = [
    class_documentation,
    method_documentation,
    inline_comments,
    method_length,
    encapsulation,
    object_oriented_design,
    exception_handling,
    input_validation,
    naming_conventions,
    code_duplication,
    modern_java_features,
]


def summarize(feedback: List[QualityFeedback]) -> Optional[QualityFeedback]:
    successes = sum(1 for f in feedback if f.type == FeedbackType.SUCCESS)
    warnings = sum(1 for f in feedback if f.type == FeedbackType.WARNING)
    if successes > warnings + 1:
        return _success(
            'Overall excellent code quality',
            'Your code demonstrates good practices in multiple areas. '
            'Great job!',
            SUMMARY,
        )
    if warnings > successes:
        return _info(
            'Several areas for improvement',
            'Your code works but has several areas that could be improved '
            'for better quality and maintainability.',
            SUMMARY,
        )
    return None


def generate_quality_feedback(
    code: str,
    rules: Iterable[FeedbackRule] = QUALITY_RULES,
) -> List[QualityFeedback]:
    src = JavaSource(code)
    feedback = [
        item for item in (rule(src) for rule in rules) if item is not None
    ]
    summary = summarize(feedback)
    if summary is not None:
        feedback.append(summary)
    return feedback
