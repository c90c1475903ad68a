import sys
from typing import List, Optional, TextIO


class BasicIO:
    """Output sink used by the `print` and `println` builtins.

    Text goes to `stream` (standard output by default). With
    `store_output=True` nothing is written; complete lines are kept in
    `output` instead, for hosts that cannot print directly.
    """
    def __init__(self, stream: Optional[TextIO] = None, store_output: bool = False):
        self.stream = stream
        self.store_output = store_output
        self.output: List[str] = []
        self._pending = ''

    def write(self, text: str):
        if self.store_output:
            lines = (self._pending + text).split('\n')
            self._pending = lines.pop()
            self.output.extend(lines)
            return
        # resolve stdout at write time so captured/redirected streams are honored
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text)

    def write_line(self, text: str):
        self.write(text + '\n')

    def flush(self):
        if self.store_output:
            if self._pending:
                self.output.append(self._pending)
                self._pending = ''
            return
        stream = self.stream if self.stream is not None else sys.stdout
        stream.flush()

    def getvalue(self) -> str:
        return '\n'.join(self.output)
