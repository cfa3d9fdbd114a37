"""signal-cli REST API transport.

Receives messages by polling the REST API for every registered account and
hands the ones that mention the bot to a single async callback, one message
at a time. Replies and reactions go back through the same REST API.

Example:
    client = SignalClient(base_url="http://cli-rest-api:8080")
    source = SignalMessageSource(client)
    source.on_message(pipeline.execute)
    await source.start()
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from infrastructure.logging import get_module_logger
from infrastructure.messaging.models import ChatMessage, Mention

logger = get_module_logger()

MessageCallback = Callable[[ChatMessage], Awaitable[None]]


class SignalMention(BaseModel):
    """Mention record as delivered by signal-cli."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uuid: str = ""
    start: int = 0
    length: int = 1
    name: str = ""
    number: Optional[str] = None


class SignalGroupInfo(BaseModel):
    """Group metadata attached to a data message."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    group_id: str = Field(default="", alias="groupId")


class SignalDataMessage(BaseModel):
    """Body of a regular chat message."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timestamp: int = 0
    message: Optional[str] = None
    mentions: List[SignalMention] = Field(default_factory=list)
    group_info: Optional[SignalGroupInfo] = Field(default=None, alias="groupInfo")


class SignalEnvelope(BaseModel):
    """Envelope of one received item."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    source: str = ""
    source_number: Optional[str] = Field(default=None, alias="sourceNumber")
    source_uuid: str = Field(default="", alias="sourceUuid")
    source_name: str = Field(default="", alias="sourceName")
    timestamp: int = 0
    data_message: Optional[SignalDataMessage] = Field(
        default=None, alias="dataMessage"
    )


class SignalReceived(BaseModel):
    """One item returned by the receive endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    envelope: SignalEnvelope
    account: str = ""


class SignalClient:
    """Thin client for the signal-cli REST API.

    Blocking requests calls run in a worker thread so the event loop keeps
    serving other invocations while one is waiting on the network.

    Attributes:
        base_url: Base URL of the REST API
        timeout: Timeout in seconds for each call
        session: Requests session with connection pooling
    """

    def __init__(self, base_url: str, timeout: int = 30) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, json: Optional[Any] = None) -> Any:
        url = f"{self.base_url}{path}"
        response = self.session.request(method, url, json=json, timeout=self.timeout)
        response.raise_for_status()
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def request(self, method: str, path: str, json: Optional[Any] = None) -> Any:
        """Perform a REST call off the event loop.

        Raises:
            requests.HTTPError: On a non-2xx response
        """
        return await asyncio.to_thread(self._request, method, path, json)

    async def list_accounts(self) -> List[str]:
        """Accounts (phone numbers) registered with the REST API."""
        return await self.request("GET", "/v1/accounts") or []

    async def list_groups(self, account: str) -> List[Dict[str, Any]]:
        """Groups the account is a member of."""
        return await self.request("GET", f"/v1/groups/{account}") or []

    async def receive(self, account: str) -> List[Dict[str, Any]]:
        """Fetch pending items for the account."""
        return await self.request("GET", f"/v1/receive/{account}") or []

    async def send_message(self, account: str, recipients: List[str], message: str) -> None:
        """Send a styled text message."""
        await self.request(
            "POST",
            "/v2/send",
            json={
                "number": account,
                "message": message,
                "recipients": recipients,
                "text_mode": "styled",
            },
        )

    async def send_reaction(
        self, account: str, recipient: str, target_author: str, timestamp: int, emoji: str
    ) -> None:
        """React to a message identified by author and timestamp."""
        await self.request(
            "POST",
            f"/v1/reactions/{account}",
            json={
                "reaction": emoji,
                "recipient": recipient,
                "target_author": target_author,
                "timestamp": timestamp,
            },
        )


class SignalChannel:
    """MessageChannel bound to one received Signal message.

    Output failures are logged and swallowed: a failed reaction must not
    turn a successful command into a failed one.
    """

    def __init__(self, client: SignalClient, message: ChatMessage):
        self._client = client
        self._account = message.account
        self._recipient = message.group or message.sender_number or message.sender_id
        self._target_author = message.sender_id
        self._timestamp = message.timestamp

    async def reply(self, text: str) -> None:
        try:
            await self._client.send_message(self._account, [self._recipient], text)
        except requests.RequestException as e:
            logger.error("signal_reply_failed", recipient=self._recipient, error=str(e))

    async def react(self, emoji: str) -> None:
        try:
            await self._client.send_reaction(
                self._account,
                self._recipient,
                self._target_author,
                self._timestamp,
                emoji,
            )
        except requests.RequestException as e:
            logger.error("signal_reaction_failed", emoji=emoji, error=str(e))


class SignalMessageSource:
    """Polling message source for every account of a signal-cli REST API."""

    def __init__(self, client: SignalClient, poll_interval: float = 1.0):
        self._client = client
        self._poll_interval = poll_interval
        self._callback: Optional[MessageCallback] = None
        self._groups: Dict[str, Dict[str, str]] = {}
        self._running = False

    def on_message(self, callback: MessageCallback) -> None:
        """Register the callback invoked for every message addressed to the bot."""
        self._callback = callback

    async def load_groups(self, account: str) -> None:
        """Cache the internal-id to group-id mapping of an account."""
        groups = await self._client.list_groups(account)
        self._groups[account] = {
            group.get("internal_id", ""): group.get("id", "") for group in groups
        }
        logger.debug("groups_cached", account=account, count=len(self._groups[account]))

    def to_chat_message(self, item: Dict[str, Any], account: str) -> Optional[ChatMessage]:
        """Convert a received item into a ChatMessage.

        Returns None for items that are not text messages (receipts,
        typing indicators, reactions).
        """
        try:
            received = SignalReceived.model_validate(item)
        except ValidationError as e:
            logger.warning("signal_item_invalid", account=account, error=str(e))
            return None

        envelope = received.envelope
        data = envelope.data_message
        if data is None or data.message is None:
            return None

        group = None
        if data.group_info is not None and data.group_info.group_id:
            group = self._groups.get(account, {}).get(data.group_info.group_id)

        message = ChatMessage(
            text=data.message,
            sender_id=envelope.source_uuid or envelope.source,
            mentions=[
                Mention(
                    uuid=m.uuid,
                    start=m.start,
                    length=m.length,
                    name=m.name,
                    number=m.number or "",
                )
                for m in data.mentions
            ],
            sender_name=envelope.source_name,
            sender_number=envelope.source_number or "",
            timestamp=envelope.timestamp,
            account=received.account or account,
            group=group,
        )
        message.channel = SignalChannel(self._client, message)
        return message

    @staticmethod
    def mentions_bot(message: ChatMessage) -> bool:
        """Whether the message mentions the receiving account."""
        return any(m.number == message.account for m in message.mentions)

    async def poll(self, account: str) -> None:
        """Receive pending items for one account and dispatch them in order."""
        items = await self._client.receive(account)
        for item in items:
            message = self.to_chat_message(item, account)
            if message is None or not self.mentions_bot(message):
                continue
            if self._callback is None:
                logger.warning("signal_message_dropped_no_callback", account=account)
                continue
            try:
                await self._callback(message)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("signal_callback_failed", account=account, error=str(e))

    async def start(self) -> None:
        """Poll every account until stop() is called."""
        if self._running:
            return
        self._running = True

        accounts = await self._client.list_accounts()
        logger.info("signal_accounts_loaded", accounts=len(accounts))
        for account in accounts:
            await self.load_groups(account)

        while self._running:
            for account in accounts:
                try:
                    await self.poll(account)
                except requests.RequestException as e:
                    logger.error("signal_receive_failed", account=account, error=str(e))
            await asyncio.sleep(self._poll_interval)

    def stop(self) -> None:
        """Stop polling after the current round."""
        self._running = False
