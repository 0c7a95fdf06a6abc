import sys
from typing import Iterable, Optional, TextIO
from typing_extensions import assert_never
from aisamples.core.models import ImageFileContent, Message, MessageContent, MessageContentUpdate, TextContent

RUN_STARTED_BANNER = "--- Run started! ---"


def banner(title: str, out: Optional[TextIO] = None) -> None:
    print(f"-------- {title} --------", file=out or sys.stdout)


def render_content(item: MessageContent) -> str:
    match item:
        case TextContent(text=text):
            return text
        case ImageFileContent(file_id=file_id):
            return f"<image from ID: {file_id}>"
        case _:
            assert_never(item)


def render_message(message: Message, out: Optional[TextIO] = None) -> None:
    """
    Writes one message block: a timestamp and role prefix, then each content
    item followed by a newline.
    """
    out = out or sys.stdout
    out.write(f"{message.created_at:%Y-%m-%d %H:%M:%S} - {message.role.value:>10}: ")
    for item in message.content:
        out.write(render_content(item))
        out.write("\n")
    if not message.content:
        out.write("\n")
    out.flush()


def render_messages(messages: Iterable[Message], out: Optional[TextIO] = None) -> None:
    for message in messages:
        render_message(message, out)


def render_update(update: MessageContentUpdate, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    out.write(update.text)
    if update.image_file_id is not None:
        out.write(f"\n[Image content file ID: {update.image_file_id}]\n")
    out.flush()
