"""
Conversation Relay Agent - Twilio ConversationRelay to OpenAI Chat Completions Bridge

This application connects phone calls handled by Twilio ConversationRelay to an
OpenAI chat model. ConversationRelay performs speech recognition and synthesis;
the relay receives each transcribed caller utterance over a WebSocket, streams
the model's reply, and sends it back in sentence-sized fragments so speech can
start before the whole reply has been generated.

Architecture Overview:
- FastAPI server exposing the voice webhook and one WebSocket per relay route
- Streaming chat completions over httpx, decoded incrementally
- Punctuation-driven segmentation of the reply into speakable fragments
- One in-memory conversation history per call

Key Components:
- bot: Conversation session, streaming client, stream decoder and segmenter
- config: Application-wide constants, logging setup, routes and settings
- handlers: TwiML generation for the voice webhook
- models: Pydantic schemas for relay messages, OpenAI payloads and history
- websocket_manager: Per-connection lifecycle and inbound message routing

Getting Started:
1. Set up environment variables:
   - OPENAI_API_KEY: Your OpenAI API key
   - OPENAI_CHAT_MODEL: Chat model to use (default gpt-4o-mini)
   - SYSTEM_PROMPT_FAQ, SYSTEM_PROMPT_TRANSLATOR_EN_JP, SYSTEM_PROMPT_TRANSLATOR_JP_EN,
     SYSTEM_PROMPT_ORDER, SYSTEM_PROMPT_BOOKING: System prompt of each route
   - PORT / HOST / LOG_LEVEL: Server settings

2. Start the server:
   ```bash
   python run.py
   ```

3. Point the Twilio number's voice webhook at:
   - https://your-server/webhook/twiml/faq (or another preset)
"""
