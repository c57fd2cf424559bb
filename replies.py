"""
Text rendering for chat replies.

Pure functions: the same arguments always produce the same text.
"""

from datetime import date
from typing import Iterable, Mapping, Sequence

from reservations import Conflict
from vocabulary import DEFAULT_VOCABULARY, Vocabulary

EXAMPLES = (
    '• "Book Main Auditorium Hall tomorrow at 10:00 AM for training"',
    '• "Book SF Seminar Hall on next Monday at morning slots for GD"',
    '• "Book ECE Seminar Hall on December 11 at full slots for workshop"',
)


def format_date(day: date) -> str:
    """Monday, October 26, 2026"""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def slot_summary(slots: Sequence[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    requested = set(slots)
    if requested == set(vocabulary.all_slots):
        return "Full day (all slots)"
    if requested == set(vocabulary.morning_slots):
        return "All morning slots"
    if requested == set(vocabulary.afternoon_slots):
        return "All afternoon slots"
    return ", ".join(vocabulary.slot_order(slots))


def confirmation(hall: str, day: date, slots: Sequence[str], purpose: str,
                 vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return (
        "✅ **BOOKING CONFIRMED!** 🎉\n\n"
        f"🏛️ **Hall:** {hall}\n"
        f"📅 **Date:** {format_date(day)}\n"
        f"⏰ **Time:** {slot_summary(slots, vocabulary)}\n"
        f"📝 **Purpose:** {purpose}\n\n"
        "Your booking has been successfully created!"
    )


def conflict(hall: str, result: Conflict) -> str:
    text = f"❌ **BOOKING CONFLICT!**\n\nSome of your requested slots are already booked for {hall}.\n\n"
    text += f"📋 **Already booked:** {', '.join(result.overlap)}\n\n"
    if result.fully_booked:
        text += "All requested slots are booked. Please choose different slots or time."
    else:
        text += f"✅ **Still available from your request:** {', '.join(result.available)}\n\n"
        text += "Would you like to book only the available slots?"
    return text


def availability(hall: str, day: date, available: Sequence[str], booked: Sequence[str],
                 vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    text = f"📅 **Availability for {hall} on {format_date(day)}**\n\n"
    if available:
        text += "✅ **AVAILABLE SLOTS:**\n"
        morning = [s for s in available if s in vocabulary.morning_slots]
        afternoon = [s for s in available if s in vocabulary.afternoon_slots]
        if morning:
            text += "🌅 **Morning Slots:**\n" + "\n".join(f"   • {s}" for s in morning) + "\n\n"
        if afternoon:
            text += "🌇 **Afternoon Slots:**\n" + "\n".join(f"   • {s}" for s in afternoon) + "\n"
    else:
        text += "❌ **NO SLOTS AVAILABLE** (All booked)\n"
    if booked:
        text += f"\n📋 **Already booked:** {', '.join(booked)}"
    text += "\n\nWould you like to book any of these slots?"
    return text


def availability_prompt(vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return (
        "📅 **To check availability, I need to know:**\n\n"
        f"• Which hall? ({', '.join(vocabulary.halls)})\n"
        '• Which date? (e.g., "December 11", "tomorrow", "next Monday")\n\n'
        '**Example:** "Check availability for Main Auditorium Hall tomorrow"'
    )


def missing_info(missing: Mapping[str, bool], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    text = "📝 **I need more information to book a hall:**\n\n"
    if missing.get("hall"):
        text += "• Which hall? Available halls:\n" + "\n".join(f"   - {h}" for h in vocabulary.halls) + "\n"
    if missing.get("date"):
        text += '• What date? (e.g., "December 11, 2025", "tomorrow", "next Monday")\n'
    if missing.get("time"):
        text += (
            "• What time? You can specify:\n"
            '   - Specific time: "10:00 AM"\n'
            '   - Slot group: "morning slots", "afternoon slots"\n'
            '   - Full day: "full slots" or "all day"\n'
        )
    if missing.get("purpose"):
        text += '• What is the purpose? (e.g., "training", "meeting", "GD", "lunch")\n'
    text += "\n**Examples:**\n" + "\n".join(EXAMPLES)
    return text


def booking_list(bookings: Iterable) -> str:
    bookings = list(bookings)
    if not bookings:
        return "📋 **Your Bookings**\n\nYou have no upcoming bookings."
    text = "📋 **YOUR UPCOMING BOOKINGS**\n\n"
    for index, booking in enumerate(bookings, start=1):
        text += f"{index}. **{booking.hall}**\n"
        text += f"   📅 Date: {format_date(booking.booking_date)}\n"
        text += f"   ⏰ Time: {', '.join(booking.slots)}\n"
        text += f"   📝 Purpose: {booking.purpose}\n\n"
    text += f"Total: {len(bookings)} booking(s)"
    return text


def greeting(name: str) -> str:
    return (
        f"👋 **Hello {name}!** I'm your AI booking assistant.\n\n"
        "I can help you:\n• Book halls 🏛️\n• Check availability 📅\n• View your bookings 📋\n\n"
        "What would you like to do?"
    )


def empty_message(name: str) -> str:
    return f"👋 Hello {name}! I'm your AI booking assistant. How can I help you today?"


def thanks(name: str) -> str:
    return f"You're welcome, {name}! 😊\n\nIs there anything else I can help you with today?"


def help_text() -> str:
    return (
        "🤖 **I can help you with:**\n\n"
        '• **Book a hall** - "Book Main Auditorium tomorrow at 10 AM for training"\n'
        '• **Check availability** - "Is SF Seminar Hall available tomorrow?"\n'
        '• **View bookings** - "Show my bookings"\n'
        '• **Cancel booking** - Use the "My Bookings" page\n\n'
        "What would you like to do?"
    )


def fallback(name: str) -> str:
    return (
        f"👋 **Hello {name}!** I'm your AI booking assistant.\n\n"
        "Try one of these:\n\n"
        '• "Book SF Seminar Hall on next Monday at 10:00 AM for GD"\n'
        '• "Check availability for Main Auditorium Hall tomorrow"\n'
        '• "Show my bookings"\n\n'
        "How can I help you today?"
    )


def booking_error() -> str:
    return (
        "❌ **ERROR CREATING BOOKING**\n\n"
        "There was an error processing your booking. Please try again or use the manual booking system."
    )


def general_error() -> str:
    return (
        "❌ Sorry, I encountered an error. Please try again or use the manual booking system.\n\n"
        'You can try:\n• "Book Main Auditorium Hall"\n• "Show my bookings"\n• "Check availability"'
    )
