# Minimal RU/EN texts + text cards for discovery
from html import escape
from typing import List, Optional

from swipe_engine.models import Match, Message, Profile

T = {
    "ru": {
        "welcome": "💫 Добро пожаловать! Заполни профиль (/set, пришли фото) и жми /discover.",
        "menu_title": "💬 Команды: /discover, /matches, /chat, /profile, /set, /stop",
        "profile_title": "👤 <b>Твой профиль</b>",
        "profile_missing": "❌ Профиль не найден. Используй /start.",
        "profile_incomplete": "📝 Профиль не заполнен: {missing}. Без этого поиск недоступен.",
        "no_more": "🌙 Анкеты закончились. Загляни позже или /discover ещё раз.",
        "no_session": "❗ Поиск не запущен. Жми /discover.",
        "stopped": "🛑 Поиск остановлен.",
        "swipe_pending": "⏳ Секунду…",
        "already_decided": "↪️ Уже решено, идём дальше.",
        "match_title": "💞 <b>Это мэтч!</b>",
        "match_body": "Вы с {name} понравились друг другу.",
        "matches_title": "💞 <b>Твои мэтчи</b>",
        "matches_empty": "Пока нет мэтчей.",
        "unmatched": "💔 Мэтч удалён.",
        "match_not_found": "❗ Мэтч не найден.",
        "blocked": "🚫 Пользователь заблокирован. Вступит в силу со следующего /discover.",
        "already_blocked": "🚫 Уже заблокирован.",
        "unblocked": "✅ Пользователь разблокирован.",
        "not_blocked": "❗ Этот пользователь не был заблокирован.",
        "user_not_found": "❗ Пользователь не найден.",
        "bad_id": "❗ Укажи числовой ID: {usage}",
        "cant_self": "❗ Нельзя сделать это с собой.",
        "store_down": "⚠️ Сервис временно недоступен, попробуй ещё раз.",
        "set_usage": "✏️ /set &lt;поле&gt; &lt;значение&gt;\nПоля: name, last_name, birthdate (1995-05-31), gender (male/female/other), looking_for (male/female/other/any), age (25-35), bio, city, country, religion, interests, languages\nФото: просто пришли картинку.",
        "saved": "✅ Сохранено.",
        "bad_value": "❗ {error}",
        "photo_saved": "📷 Фото обновлено.",
        "chat_usage": "💬 /chat &lt;id мэтча&gt; &lt;текст&gt;",
        "history_usage": "📜 /history &lt;id мэтча&gt;",
        "msg_sent": "📨 Отправлено.",
        "msg_rejected": "❗ Сообщение не отправлено: {error}",
        "msg_from": "💌 <b>{name}</b> (мэтч #{match_id}):",
        "history_empty": "Сообщений пока нет.",
        "unread": "непрочитано",
        "btn_discover": "🔥 Искать",
        "btn_stop": "⛔ Стоп",
        "btn_matches": "💞 Мэтчи",
        "btn_profile": "👁 Профиль",
        "btn_like": "❤️ Нравится",
        "btn_pass": "✖️ Пропустить",
        "btn_more": "🔽 Подробнее",
        "btn_less": "🔼 Свернуть",
        "btn_close": "👌 Продолжить",
        "bio": "О себе",
        "interests": "Интересы",
        "languages": "Языки",
        "photo": "Фото",
    },
    "en": {
        "welcome": "💫 Welcome! Fill in your profile (/set, send a photo) and hit /discover.",
        "menu_title": "💬 Commands: /discover, /matches, /chat, /profile, /set, /stop",
        "profile_title": "👤 <b>Your profile</b>",
        "profile_missing": "❌ Profile not found. Use /start.",
        "profile_incomplete": "📝 Your profile is missing: {missing}. Discovery is unavailable until then.",
        "no_more": "🌙 No more profiles. Come back later or /discover again.",
        "no_session": "❗ Discovery is not running. Hit /discover.",
        "stopped": "🛑 Discovery stopped.",
        "swipe_pending": "⏳ One moment…",
        "already_decided": "↪️ Already decided, moving on.",
        "match_title": "💞 <b>It's a match!</b>",
        "match_body": "You and {name} liked each other.",
        "matches_title": "💞 <b>Your matches</b>",
        "matches_empty": "No matches yet.",
        "unmatched": "💔 Match removed.",
        "match_not_found": "❗ Match not found.",
        "blocked": "🚫 User blocked. Takes effect from your next /discover.",
        "already_blocked": "🚫 Already blocked.",
        "unblocked": "✅ User unblocked.",
        "not_blocked": "❗ That user was not blocked.",
        "user_not_found": "❗ User not found.",
        "bad_id": "❗ Give a numeric id: {usage}",
        "cant_self": "❗ You can't do that to yourself.",
        "store_down": "⚠️ Service temporarily unavailable, please try again.",
        "set_usage": "✏️ /set &lt;field&gt; &lt;value&gt;\nFields: name, last_name, birthdate (1995-05-31), gender (male/female/other), looking_for (male/female/other/any), age (25-35), bio, city, country, religion, interests, languages\nPhoto: just send a picture.",
        "saved": "✅ Saved.",
        "bad_value": "❗ {error}",
        "photo_saved": "📷 Photo updated.",
        "chat_usage": "💬 /chat &lt;match id&gt; &lt;text&gt;",
        "history_usage": "📜 /history &lt;match id&gt;",
        "msg_sent": "📨 Sent.",
        "msg_rejected": "❗ Message not sent: {error}",
        "msg_from": "💌 <b>{name}</b> (match #{match_id}):",
        "history_empty": "No messages yet.",
        "unread": "unread",
        "btn_discover": "🔥 Discover",
        "btn_stop": "⛔ Stop",
        "btn_matches": "💞 Matches",
        "btn_profile": "👁 Profile",
        "btn_like": "❤️ Like",
        "btn_pass": "✖️ Pass",
        "btn_more": "🔽 Details",
        "btn_less": "🔼 Less",
        "btn_close": "👌 Keep swiping",
        "bio": "About",
        "interests": "Interests",
        "languages": "Languages",
        "photo": "Photo",
    },
}


def lang_of(code: Optional[str]) -> str:
    return "en" if (code or "").lower().startswith("en") else "ru"


def t(lang: str, key: str) -> str:
    lang = lang if lang in T else "ru"
    return T[lang].get(key, key)


def _name(p: Profile) -> str:
    return escape(" ".join(x for x in (p.first_name, p.last_name) if x) or f"#{p.user_id}")


def render_card(lang: str, p: Profile, expanded: bool = False) -> str:
    head = _name(p)
    if p.age is not None:
        head += f", {p.age}"
    lines = [f"<b>{head}</b>"]
    if p.city:
        lines.append(f"📍 {escape(p.city)}")
    if p.photo:
        # uploaded photos are Telegram file ids, only real URLs become links
        if p.photo.startswith(("http://", "https://")):
            lines.append(f'<a href="{escape(p.photo, quote=True)}">📷 {t(lang, "photo")}</a>')
        else:
            lines.append(f"📷 {t(lang, 'photo')}")
    if expanded:
        if p.bio:
            lines.append(f"\n{t(lang, 'bio')}: {escape(p.bio)}")
        if p.interests:
            lines.append(f"{t(lang, 'interests')}: {escape(', '.join(p.interests))}")
        if p.languages:
            lines.append(f"{t(lang, 'languages')}: {escape(', '.join(p.languages))}")
    return "\n".join(lines)


def render_profile(lang: str, p: Profile) -> str:
    body = render_card(lang, p, expanded=True)
    missing = p.missing_fields()
    text = f"{t(lang, 'profile_title')}\n\n{body}"
    if missing:
        text += "\n\n" + t(lang, "profile_incomplete").format(missing=", ".join(missing))
    return text


def render_match(lang: str, p: Profile) -> str:
    return f"{t(lang, 'match_title')}\n{t(lang, 'match_body').format(name=_name(p))}\n\n{render_card(lang, p)}"


def render_matches(lang: str, me: int, matches: List[Match], names: dict, unread: Optional[dict] = None) -> str:
    if not matches:
        return t(lang, "matches_empty")
    unread = unread or {}
    rows = [t(lang, "matches_title")]
    for m in matches:
        other = m.other(me)
        row = f"#{m.id} · {escape(names.get(other) or str(other))} · {m.created_at:%Y-%m-%d}"
        if unread.get(m.id):
            row += f" · ✉️ {unread[m.id]} {t(lang, 'unread')}"
        rows.append(row)
    return "\n".join(rows)


def render_history(lang: str, me: int, messages: List[Message], names: dict) -> str:
    if not messages:
        return t(lang, "history_empty")
    rows = []
    for msg in messages:
        who = "→" if msg.sender_id == me else escape(names.get(msg.sender_id) or str(msg.sender_id))
        rows.append(f"<i>{msg.created_at:%m-%d %H:%M}</i> <b>{who}</b>: {escape(msg.content)}")
    return "\n".join(rows)
