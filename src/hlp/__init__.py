"""hlp -- stream language-model replies into plain-text chat transcripts."""

import logging

__version__ = '0.4.0'

# Log records stay off the terminal unless --debug attaches a file handler.
logging.getLogger('hlp').addHandler(logging.NullHandler())
