"""
Handlers module for the HTTP side of the conversation relay.

Key components:
- twiml_handlers: Builds the ConversationRelay TwiML returned to Twilio's voice
  webhook, from a named preset or from query parameters.

Usage examples:
```python
from relay.handlers.twiml_handlers import render_twiml, resolve_preset

twiml = render_twiml(resolve_preset("faq", "wss://relay.example.com"))
```
"""

# Handlers module initialization
