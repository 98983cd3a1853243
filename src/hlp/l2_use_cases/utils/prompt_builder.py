"""Pure functions for building the opening messages of an ask session."""

from __future__ import annotations

from collections.abc import Iterable

from hlp.l1_entities.chat_message import ChatMessage

BASH_SYSTEM_PROMPT = """
For the user's following questions, let's think step by step in bash comments to output to make sure
we output the correct bash command with comments. Make sure to ensure your output is always valid bash.

use the following example to understand the desired response style:
Question:
How do I recursively alter all files to the standard chmod permissions in a directory

Answer:
# To recursively alter all files to the standard chmod permissions in a directory, you can use the following command with comments:
# use the chmod command to change the file permissions recursively
chmod -R 644 /path/to/directory/
# -R option stands for recursive, which will apply the permissions to all files and subdirectories within the directory
# 644 is the standard permission for files, which means the owner has read and write access, and others have only read access
"""  # noqa: E501


def build_ask_content(question: Iterable[str], attachments: Iterable[str] = ()) -> str:
    """Join question words with spaces, then append each attachment after a blank separator."""
    words = list(question)
    content = ' '.join(words)
    if words and not words[-1].endswith('\n'):
        content += '\n'
    for text in attachments:
        content += '\n' + text
    return content


def build_ask_messages(content: str, *, bash: bool = False) -> list[ChatMessage]:
    """Build the opening conversation for an ask session."""
    if bash:
        return [
            ChatMessage(role='system', content=BASH_SYSTEM_PROMPT),
            ChatMessage(role='user', content=content),
        ]
    return [ChatMessage(role='system', content=content)]
