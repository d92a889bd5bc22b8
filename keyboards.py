from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup, KeyboardButton, ReplyKeyboardMarkup

from texts_ui import t

# callback_data values handled in bot.py
CB_LIKE = "swipe_like"
CB_PASS = "swipe_pass"
CB_DETAILS = "card_details"
CB_CLOSE_MATCH = "match_close"


def kb_main(lang: str, discovering=False):
    if discovering:
        return ReplyKeyboardMarkup(
            keyboard=[[KeyboardButton(text=t(lang, "btn_stop"))], [KeyboardButton(text=t(lang, "btn_matches"))]],
            resize_keyboard=True
        )
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=t(lang, "btn_discover"))],
            [KeyboardButton(text=t(lang, "btn_matches")), KeyboardButton(text=t(lang, "btn_profile"))],
        ],
        resize_keyboard=True
    )


def kb_card(lang: str, expanded=False) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text=t(lang, "btn_pass"), callback_data=CB_PASS),
            InlineKeyboardButton(text=t(lang, "btn_like"), callback_data=CB_LIKE),
        ],
        [InlineKeyboardButton(text=t(lang, "btn_less" if expanded else "btn_more"), callback_data=CB_DETAILS)],
    ])


def kb_match(lang: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=t(lang, "btn_close"), callback_data=CB_CLOSE_MATCH)],
    ])


def labels(key: str) -> set[str]:
    """Both language variants of a reply-keyboard label, for text filters."""
    return {t("ru", key), t("en", key)}
