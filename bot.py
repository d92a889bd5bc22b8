# bot.py - RU/EN discovery front-end: profile editing, cards, swipes, matches, chat, blocks
import asyncio
import logging
from html import escape
from typing import Optional

from aiogram import Bot, Dispatcher, F, types
from aiogram.client.default import DefaultBotProperties
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types.error_event import ErrorEvent

import config
from dev_router import router_dev
from keyboards import CB_CLOSE_MATCH, CB_DETAILS, CB_LIKE, CB_PASS, kb_card, kb_main, kb_match, labels
from setup_commands import ensure_bot_commands
from stats_api import start_stats_server
from swipe_engine import (
    Action, DiscoverySession, DuplicateBlock, NotFound, ProfileIncomplete,
    StoreUnavailable, SwipeOutcome, ValidationError,
    block_user, close_db, get_match, get_profile, init_db, list_matches, list_messages,
    mark_read, parse_profile_edit, save_profile, send_message, unblock_user, unmatch, unread_counts,
)
from texts_ui import lang_of, render_card, render_history, render_match, render_matches, render_profile, t

# ===================== LOGS, DISPATCHER =====================
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
dp = Dispatcher(storage=MemoryStorage())
dp.include_router(router_dev)

# ===================== IN-RAM STATE =====================
# one discovery session per Telegram user; created on /discover, dropped on /stop
sessions: dict[int, DiscoverySession] = {}


# ===================== SEND / EDIT HELPERS =====================
async def safe_answer(message: types.Message, text: str, **kw):
    try:
        return await message.answer(text, **kw)
    except TelegramForbiddenError:
        sessions.pop(message.chat.id, None)
        return None


async def safe_edit_text(message: types.Message, text: str, **kw):
    try:
        return await message.edit_text(text, **kw)
    except TelegramBadRequest as e:
        if "message is not modified" in str(e).lower():
            return message
        raise


async def show_session(message: types.Message, s: DiscoverySession, lang: str, edit: bool = False):
    if s.match_notification is not None:
        text, kb = render_match(lang, s.match_notification.profile), kb_match(lang)
    elif s.current_candidate is not None:
        text, kb = render_card(lang, s.current_candidate, s.detail_expanded), kb_card(lang, s.detail_expanded)
    else:
        text, kb = t(lang, "no_more"), None
    if edit:
        await safe_edit_text(message, text, reply_markup=kb)
    else:
        await safe_answer(message, text, reply_markup=kb)


def arg_id(command: CommandObject) -> Optional[int]:
    try:
        return int((command.args or "").strip())
    except ValueError:
        return None


# ===================== BASIC COMMANDS =====================
@dp.message(CommandStart())
async def start_cmd(message: types.Message):
    uid = message.from_user.id
    l = lang_of(message.from_user.language_code)
    try:
        try:
            profile = await get_profile(uid)
        except NotFound:
            profile = await save_profile(uid, first_name=message.from_user.first_name)
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, t(l, "welcome"), reply_markup=kb_main(l))
    await safe_answer(message, render_profile(l, profile))


@dp.message(Command("profile"))
@dp.message(F.text.in_(labels("btn_profile")))
async def show_profile(message: types.Message):
    l = lang_of(message.from_user.language_code)
    try:
        profile = await get_profile(message.from_user.id)
    except NotFound:
        await safe_answer(message, t(l, "profile_missing"))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, render_profile(l, profile))


@dp.message(Command("set"))
async def set_cmd(message: types.Message, command: CommandObject):
    uid = message.from_user.id
    l = lang_of(message.from_user.language_code)
    if not (command.args or "").strip():
        await safe_answer(message, t(l, "set_usage"))
        return
    try:
        profile = await save_profile(uid, **parse_profile_edit(command.args))
    except ValidationError as e:
        await safe_answer(message, t(l, "bad_value").format(error=escape(str(e))))
        await safe_answer(message, t(l, "set_usage"))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, t(l, "saved"))
    await safe_answer(message, render_profile(l, profile))


@dp.message(F.photo)
async def photo_msg(message: types.Message):
    l = lang_of(message.from_user.language_code)
    try:
        # largest size last; the file id is what Telegram re-sends later
        profile = await save_profile(message.from_user.id, photo=message.photo[-1].file_id)
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, t(l, "photo_saved"))
    await safe_answer(message, render_profile(l, profile))


# ===================== DISCOVERY =====================
@dp.message(Command("discover"))
@dp.message(F.text.in_(labels("btn_discover")))
async def discover_cmd(message: types.Message):
    uid = message.from_user.id
    l = lang_of(message.from_user.language_code)
    try:
        s = await DiscoverySession.begin(uid)
    except ProfileIncomplete as e:
        await safe_answer(message, t(l, "profile_incomplete").format(missing=", ".join(e.missing)))
        return
    except NotFound:
        await safe_answer(message, t(l, "profile_missing"))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    sessions[uid] = s
    await safe_answer(message, t(l, "menu_title"), reply_markup=kb_main(l, discovering=True))
    await show_session(message, s, l)


@dp.message(Command("stop"))
@dp.message(F.text.in_(labels("btn_stop")))
async def stop_cmd(message: types.Message):
    l = lang_of(message.from_user.language_code)
    if sessions.pop(message.from_user.id, None) is None:
        await safe_answer(message, t(l, "no_session"), reply_markup=kb_main(l))
        return
    await safe_answer(message, t(l, "stopped"), reply_markup=kb_main(l))


@dp.callback_query(F.data.in_({CB_LIKE, CB_PASS}))
async def swipe_cb(callback: types.CallbackQuery):
    l = lang_of(callback.from_user.language_code)
    s = sessions.get(callback.from_user.id)
    if s is None:
        await callback.answer(t(l, "no_session"), show_alert=True)
        return
    action = Action.LIKE if callback.data == CB_LIKE else Action.PASS
    try:
        outcome = await s.submit_swipe(action)
    except StoreUnavailable:
        await callback.answer(t(l, "store_down"), show_alert=True)
        return
    if outcome is SwipeOutcome.DROPPED:
        await callback.answer(t(l, "swipe_pending"))
        return
    if outcome is SwipeOutcome.SKIPPED:
        await callback.answer(t(l, "already_decided"))
    else:
        await callback.answer()
    await show_session(callback.message, s, l, edit=True)


@dp.callback_query(F.data == CB_DETAILS)
async def details_cb(callback: types.CallbackQuery):
    l = lang_of(callback.from_user.language_code)
    s = sessions.get(callback.from_user.id)
    if s is None:
        await callback.answer(t(l, "no_session"), show_alert=True)
        return
    s.toggle_detail_view()
    await callback.answer()
    await show_session(callback.message, s, l, edit=True)


@dp.callback_query(F.data == CB_CLOSE_MATCH)
async def close_match_cb(callback: types.CallbackQuery):
    l = lang_of(callback.from_user.language_code)
    s = sessions.get(callback.from_user.id)
    if s is None:
        await callback.answer(t(l, "no_session"), show_alert=True)
        return
    s.dismiss_match_notification()
    await callback.answer()
    await show_session(callback.message, s, l, edit=True)


# ===================== MATCHES =====================
@dp.message(Command("matches"))
@dp.message(F.text.in_(labels("btn_matches")))
async def matches_cmd(message: types.Message):
    uid = message.from_user.id
    l = lang_of(message.from_user.language_code)
    try:
        items = await list_matches(uid)
        names = {}
        for m in items:
            p = await get_profile(m.other(uid))
            names[p.user_id] = p.first_name
        unread = await unread_counts(uid)
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, render_matches(l, uid, items, names, unread))


@dp.message(Command("unmatch"))
async def unmatch_cmd(message: types.Message, command: CommandObject):
    l = lang_of(message.from_user.language_code)
    match_id = arg_id(command)
    if match_id is None:
        await safe_answer(message, t(l, "bad_id").format(usage="/unmatch 12"))
        return
    try:
        await unmatch(message.from_user.id, match_id)
    except NotFound:
        await safe_answer(message, t(l, "match_not_found"))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, t(l, "unmatched"))


# ===================== MATCH CHAT =====================
async def relay_to_partner(bot: Bot, partner_id: int, sender_name: str, match_id: int, text: str, lang: str):
    head = t(lang, "msg_from").format(name=escape(sender_name), match_id=match_id)
    try:
        await bot.send_message(partner_id, f"{head}\n{escape(text)}")
    except TelegramForbiddenError:
        # stored anyway; they will see it in /history
        logging.info("[chat] partner %s blocked the bot, message kept for /history", partner_id)


@dp.message(Command("chat"))
async def chat_cmd(message: types.Message, command: CommandObject):
    uid = message.from_user.id
    l = lang_of(message.from_user.language_code)
    raw_id, _, text = (command.args or "").strip().partition(" ")
    try:
        match_id = int(raw_id)
    except ValueError:
        await safe_answer(message, t(l, "chat_usage"))
        return
    try:
        sent = await send_message(uid, match_id, text)
        match = await get_match(uid, match_id)
        me = await get_profile(uid)
    except NotFound:
        await safe_answer(message, t(l, "match_not_found"))
        return
    except ValidationError as e:
        await safe_answer(message, t(l, "msg_rejected").format(error=escape(str(e))))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await relay_to_partner(message.bot, match.other(uid), me.first_name or str(uid), match_id, sent.content, l)
    await safe_answer(message, t(l, "msg_sent"))


@dp.message(Command("history"))
async def history_cmd(message: types.Message, command: CommandObject):
    uid = message.from_user.id
    l = lang_of(message.from_user.language_code)
    match_id = arg_id(command)
    if match_id is None:
        await safe_answer(message, t(l, "history_usage"))
        return
    try:
        match = await get_match(uid, match_id)
        items = await list_messages(uid, match_id)
        await mark_read(uid, match_id)
        partner = await get_profile(match.other(uid))
    except NotFound:
        await safe_answer(message, t(l, "match_not_found"))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    names = {partner.user_id: partner.first_name}
    await safe_answer(message, render_history(l, uid, items, names))


# ===================== BLOCKS =====================
@dp.message(Command("block"))
async def block_cmd(message: types.Message, command: CommandObject):
    l = lang_of(message.from_user.language_code)
    target = arg_id(command)
    if target is None:
        await safe_answer(message, t(l, "bad_id").format(usage="/block 123456"))
        return
    try:
        await block_user(message.from_user.id, target)
    except ValidationError:
        await safe_answer(message, t(l, "cant_self"))
        return
    except DuplicateBlock:
        await safe_answer(message, t(l, "already_blocked"))
        return
    except NotFound:
        await safe_answer(message, t(l, "user_not_found"))
        return
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, t(l, "blocked"))


@dp.message(Command("unblock"))
async def unblock_cmd(message: types.Message, command: CommandObject):
    l = lang_of(message.from_user.language_code)
    target = arg_id(command)
    if target is None:
        await safe_answer(message, t(l, "bad_id").format(usage="/unblock 123456"))
        return
    try:
        removed = await unblock_user(message.from_user.id, target)
    except StoreUnavailable:
        await safe_answer(message, t(l, "store_down"))
        return
    await safe_answer(message, t(l, "unblocked" if removed else "not_blocked"))


# ===================== GLOBAL ERROR HANDLER =====================
@dp.error()
async def _errors_handler(event: ErrorEvent):
    exc = event.exception
    if isinstance(exc, TelegramForbiddenError):
        upd = event.update
        uid = None
        if upd.message is not None:
            uid = upd.message.chat.id
        elif upd.callback_query is not None:
            uid = upd.callback_query.from_user.id
        logging.warning("[forbidden] user=%s blocked bot - dropping session", uid)
        if uid:
            sessions.pop(uid, None)
        return True
    logging.error("[aiogram-error] %s: %s", type(exc).__name__, exc)


# ===================== MAIN =====================
async def main():
    if not config.TOKEN:
        raise RuntimeError("TOKEN is not set")
    await init_db()
    bot = Bot(token=config.TOKEN, default=DefaultBotProperties(parse_mode="HTML"))
    await ensure_bot_commands(bot)

    stats_task = asyncio.create_task(
        start_stats_server(host=config.STATS_HOST, port=config.STATS_PORT, open_browser=config.AUTO_OPEN_STATS)
    )
    logging.info("💫 discovery bot started.")
    try:
        await dp.start_polling(bot)
    finally:
        stats_task.cancel()
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
