# setup_commands.py - set_my_commands for RU/EN
import logging
from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.types import BotCommand

RU = [
    ("start", "Запустить бота"),
    ("discover", "Смотреть анкеты"),
    ("stop", "Остановить поиск"),
    ("profile", "Мой профиль"),
    ("set", "Изменить профиль: /set <поле> <значение>"),
    ("matches", "Мои мэтчи"),
    ("chat", "Написать мэтчу: /chat <id> <текст>"),
    ("history", "Переписка: /history <id>"),
    ("unmatch", "Удалить мэтч: /unmatch <id>"),
    ("block", "Заблокировать: /block <user_id>"),
    ("unblock", "Разблокировать: /unblock <user_id>"),
]
EN = [
    ("start", "Start the bot"),
    ("discover", "Browse profiles"),
    ("stop", "Stop discovery"),
    ("profile", "My profile"),
    ("set", "Edit profile: /set <field> <value>"),
    ("matches", "My matches"),
    ("chat", "Message a match: /chat <id> <text>"),
    ("history", "Conversation: /history <id>"),
    ("unmatch", "Remove a match: /unmatch <id>"),
    ("block", "Block: /block <user_id>"),
    ("unblock", "Unblock: /unblock <user_id>"),
]


def commands(pairs) -> list[BotCommand]:
    return [BotCommand(command=c, description=d) for c, d in pairs]


async def ensure_bot_commands(bot: Bot):
    try:
        await bot.set_my_commands(commands(RU), language_code="ru")
        await bot.set_my_commands(commands(EN), language_code="en")
        # default scope (no language)
        await bot.set_my_commands(commands(RU))
    except TelegramAPIError as e:
        logging.warning("setup_commands skipped: %s", e)
