"""Canned FAQ and keyword-rule assistant for water well questions."""

import asyncio
import logging
from collections import deque
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from wellpredict.config import CHAT_REPLY_DELAY_SECONDS, CHAT_TRANSCRIPT_LIMIT

logger = logging.getLogger(__name__)

GREETING = "Hello! I'm your AI assistant for water well prediction. How can I help you today?"


class FAQEntry(BaseModel):
    question: str
    answer: str


class ChatMessage(BaseModel):
    role: str
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


FAQ = [
    FAQEntry(
        question="What factors affect groundwater prediction?",
        answer="Groundwater prediction depends on several key factors: soil type (clay retains "
               "more water than sand), rock formation (sedimentary rocks are generally better), "
               "depth of drilling, local topography, rainfall patterns, and geological history "
               "of the area.",
    ),
    FAQEntry(
        question="How accurate are the predictions?",
        answer="Our AI model achieves 85-90% accuracy based on the input parameters. However, "
               "actual results may vary due to local geological variations. We recommend "
               "conducting a geological survey for critical projects.",
    ),
    FAQEntry(
        question="What is the best time to drill?",
        answer="The optimal drilling time is typically during the early monsoon season "
               "(June-July) when groundwater levels are replenished but before heavy rains make "
               "access difficult. Avoid drilling during extreme weather conditions.",
    ),
    FAQEntry(
        question="How do I interpret the location data?",
        answer="Location coordinates help determine regional geological patterns. Areas near "
               "water bodies, in valleys, or with historical water sources typically have better "
               "groundwater potential. Elevation and proximity to recharge areas are also "
               "important factors.",
    ),
]

# First matching rule wins.
RULES: list[tuple[tuple[str, ...], str]] = [
    (("groundwater", "water level"),
     "Groundwater levels vary based on local geology, rainfall, and seasonal patterns. For your "
     "specific location, I recommend using our prediction tool with your soil type, rock "
     "formation, and depth requirements. Would you like me to guide you through the prediction "
     "process?"),
    (("soil", "clay", "sand"),
     "Different soil types have varying water retention capabilities:\n\n"
     "• Clay soil: High water retention, medium drilling difficulty\n"
     "• Sandy soil: Low retention but easy drilling\n"
     "• Loamy soil: Balanced properties, good for wells\n\n"
     "What type of soil are you working with?"),
    (("rock", "stone"),
     "Rock formations significantly impact groundwater:\n\n"
     "• Sedimentary rocks (limestone, sandstone): Excellent for groundwater\n"
     "• Igneous rocks: Generally poor water storage\n"
     "• Metamorphic rocks: Variable, depends on fractures\n\n"
     "Limestone and sandstone are typically the best for water wells."),
    (("depth", "drill"),
     "Drilling depth recommendations:\n\n"
     "• Shallow wells (10-30m): Suitable for areas with high water tables\n"
     "• Medium depth (30-100m): Most common for residential use\n"
     "• Deep wells (100m+): Required in arid regions or areas with deep aquifers\n\n"
     "The optimal depth depends on your local water table and geological conditions."),
    (("weather", "rain"),
     "Weather significantly affects groundwater:\n\n"
     "• Rainfall recharges aquifers\n"
     "• Dry seasons lower water tables\n"
     "• Temperature affects evaporation rates\n"
     "• Humidity indicates local water availability\n\n"
     "Check our Weather section for current conditions and their impact on groundwater levels."),
    (("location", "gps", "map"),
     "Location is crucial for groundwater prediction:\n\n"
     "• Valleys and low-lying areas typically have better groundwater\n"
     "• Areas near rivers or lakes have higher water tables\n"
     "• Mountainous regions may have deeper water tables\n"
     "• Coastal areas may have saltwater intrusion issues\n\n"
     "Use our GPS & Map feature to mark potential drilling sites and analyze their suitability."),
    (("cost", "price"),
     "Well drilling costs vary by:\n\n"
     "• Depth required (deeper = more expensive)\n"
     "• Soil/rock type (harder materials cost more)\n"
     "• Location accessibility\n"
     "• Equipment needed\n"
     "• Local labor rates\n\n"
     "Typically ranges from $3,000-$15,000 for residential wells. Get quotes from local drilling "
     "contractors for accurate estimates."),
    (("hello", "hi", "help"),
     "Hello! I'm here to help with your water well questions. I can assist with:\n\n"
     "• Groundwater prediction analysis\n"
     "• Soil and rock type information\n"
     "• Optimal drilling locations\n"
     "• Weather impact on water levels\n"
     "• Best practices for well drilling\n\n"
     "What would you like to know?"),
]

FALLBACK_REPLY = (
    "I understand you're asking about water well prediction. While I can provide general "
    "guidance, I recommend using our prediction tool for specific analysis. You can also explore "
    "our soil data, weather insights, and map features for comprehensive information. Is there a "
    "specific aspect of groundwater prediction you'd like to know more about?"
)


class ChatResponder:
    """Keeps a bounded transcript and answers with the first keyword rule that matches.

    Matching is plain substring search on the lower-cased message, so
    "this" matches the "hi" rule just as it would in the dashboard.
    """

    def __init__(self, reply_delay: float = CHAT_REPLY_DELAY_SECONDS,
                 max_messages: int = CHAT_TRANSCRIPT_LIMIT):
        self.reply_delay = reply_delay
        # oldest messages drop off once the limit is reached
        self.transcript: deque[ChatMessage] = deque(maxlen=max_messages)
        self.transcript.append(ChatMessage(role="bot", content=GREETING))

    @staticmethod
    def reply(message: str) -> str:
        if not message.strip():
            raise ValueError("Message must not be blank")
        text = message.lower()
        for keywords, answer in RULES:
            if any(k in text for k in keywords):
                return answer
        return FALLBACK_REPLY

    async def send(self, message: str) -> ChatMessage:
        answer = self.reply(message)
        self.transcript.append(ChatMessage(role="user", content=message))
        if self.reply_delay > 0:
            await asyncio.sleep(self.reply_delay)
        bot = ChatMessage(role="bot", content=answer)
        self.transcript.append(bot)
        return bot

    def ask_faq(self, index: int) -> ChatMessage:
        """Append a FAQ question and its answer to the transcript.

        Raises ``IndexError`` for an unknown FAQ index.
        """
        if not 0 <= index < len(FAQ):
            raise IndexError(f"No FAQ entry {index}")
        entry = FAQ[index]
        self.transcript.append(ChatMessage(role="user", content=entry.question))
        bot = ChatMessage(role="bot", content=entry.answer)
        self.transcript.append(bot)
        return bot
