"""Endpoint methods shared by the sync and async clients.

Each method builds one ``Request`` and hands it to ``self.request``. On
``Client`` that returns the decoded value; on ``AsyncClient`` it returns an
awaitable of the same value, hence the ``Result[...]`` annotations.
"""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar, Union

from fapi.models import (
    CONTENT_TYPE,
    CONTENT_TYPE_FORMATS,
    IMAGESCRIPT_CPUTIME,
    IMAGESCRIPT_MEMORY,
    IMAGESCRIPT_WALLTIME,
    BodyWithHeaders,
    HttpMethod,
    ImageFormat,
    Request,
    ReturnMethod,
)
from fapi.routes import Routes
from fapi.schemas import EvalTarget, EyesOverlay, ImageScriptResult, QuoteOptions

_T = TypeVar("_T")
_U = TypeVar("_U")

Result = Union[_T, Awaitable[_T]]
JSON = Any


def _args(**kwargs: Any) -> dict[str, Any]:
    """Drop unset options so they are absent on the wire rather than null."""
    return {key: value for key, value in kwargs.items() if value is not None}


def _header_float(headers: Mapping[str, str], name: str) -> float:
    try:
        return float(headers[name])
    except (KeyError, ValueError):
        return math.nan


def _image_script_result(result: BodyWithHeaders) -> ImageScriptResult:
    content_type = result.headers.get(CONTENT_TYPE, "").split(";")[0].strip()
    return ImageScriptResult(
        image=result.body,
        format=CONTENT_TYPE_FORMATS.get(content_type, ImageFormat.PNG),
        wall_time=_header_float(result.headers, IMAGESCRIPT_WALLTIME),
        cpu_time=_header_float(result.headers, IMAGESCRIPT_CPUTIME),
        memory_usage=_header_float(result.headers, IMAGESCRIPT_MEMORY),
    )


class Endpoints(ABC):
    base_url: str

    @abstractmethod
    def request(self, request: Request) -> Any:
        """Dispatch *request*; returns the value or an awaitable of it."""

    @abstractmethod
    def _then(self, result: Any, callback: Callable[[Any], _U]) -> Result[_U]:
        """Apply *callback* to a result from ``request`` once it is available."""

    # -- request shapes ------------------------------------------------------

    def _post(
        self,
        path: str,
        body: JSON,
        return_type: ReturnMethod = ReturnMethod.BODY,
        query: Mapping[str, Any] | None = None,
    ) -> Result[Any]:
        return self.request(
            Request(
                method=HttpMethod.POST,
                path=path,
                body=body,
                query=query,
                return_type=return_type,
            )
        )

    def fetch_image(self, path: str, body: JSON) -> Result[bytes]:
        """POST *body* to an image endpoint and return the image bytes."""
        if not path.startswith("/"):
            path = "/" + path
        return self._post(path, body)

    def request_image_from_image(self, path: str, image: str) -> Result[bytes]:
        return self.fetch_image(path, {"images": [image]})

    def request_image_from_text(self, path: str, text: str) -> Result[bytes]:
        return self.fetch_image(path, {"args": {"text": text}})

    def request_image_from_both(self, path: str, image: str, text: str) -> Result[bytes]:
        return self.fetch_image(path, {"images": [image], "args": {"text": text}})

    # -- service -------------------------------------------------------------

    def index(self) -> Result[str]:
        """Fetch the service's landing page from the bare base URL."""
        return self.request(
            Request(method=HttpMethod.GET, url=self.base_url, return_type=ReturnMethod.TEXT)
        )

    def ping(self) -> Result[int]:
        """Round-trip time of ``index()`` in milliseconds."""
        start = time.perf_counter()
        return self._then(
            self.index(),
            lambda _: round((time.perf_counter() - start) * 1000),
        )

    def get_paths(self) -> Result[dict[str, JSON]]:
        """Every endpoint fAPI serves, keyed by name (see ``schemas.PathEntry``)."""
        return self.request(
            Request(method=HttpMethod.GET, path=Routes.PATHLIST, return_type=ReturnMethod.JSON)
        )

    # -- structured endpoints ------------------------------------------------

    def fetch_4chan_board(
        self,
        board: str | None = None,
        thread: str | None = None,
    ) -> Result[bytes]:
        path = Routes._4CHAN
        if board:
            path += f"/{board}"
            if thread:
                path += f"/{thread}"
        return self.request(Request(method=HttpMethod.GET, path=path))

    def buzzfeed(self, text: str | None = None) -> Result[bytes]:
        return self.fetch_image(Routes.BUZZFEED, {"args": _args(text=text)})

    def composite(self, images: str | Sequence[str]) -> Result[bytes]:
        if isinstance(images, str):
            images = [images]
        return self.fetch_image(Routes.COMPOSITE, {"images": list(images)})

    def deepfry(self, image: str, strength: int) -> Result[bytes]:
        return self.fetch_image(Routes.DEEPFRY, {"images": [image], "args": {"text": strength}})

    def duckduckgo(self, query: str) -> Result[JSON]:
        """Web search; see ``schemas.DuckDuckGo`` for the result shape."""
        return self._post(Routes.DUCKDUCKGO, {"args": {"text": query}}, ReturnMethod.JSON)

    def duckduckgo_images(self, query: str, safe: bool = True) -> Result[JSON]:
        """Image search returning a list of image URLs."""
        safety_level = 1 if safe else -2
        body = {"args": {"text": query, "safetyLevel": safety_level}}
        return self._post(Routes.DUCKDUCKGOIMAGES, body, ReturnMethod.JSON)

    def emojify(
        self,
        image: str,
        text: str,
        foreground_emoji: str,
        background_emoji: str,
        vertical: bool | None = None,
    ) -> Result[str]:
        body = {
            "images": [image],
            "args": _args(
                text=text,
                foreground=foreground_emoji,
                background=background_emoji,
                vertical=vertical,
            ),
        }
        return self._post(Routes.EMOJIFY, body, ReturnMethod.TEXT)

    def emoji_mosaic(self, image: str, resolution: int | None = None) -> Result[bytes]:
        text = "" if resolution is None else str(resolution)
        return self.request_image_from_both(Routes.EMOJIMOSAIC, image, text)

    def eval(self, text: str, target: EvalTarget | None = None) -> Result[str]:
        """Run *text* on fAPI's eval worker and return its output."""
        body = {"args": _args(text=text, target=target)}
        return self._post(Routes.EVAL, body, ReturnMethod.TEXT)

    def eval_magik(self, image: str, text: str | Sequence[str]) -> Result[bytes]:
        if not isinstance(text, str):
            text = list(text)
        return self.fetch_image(Routes.EVALMAGIK, {"images": [image], "args": {"text": text}})

    def eyes(self, image: str, overlay: EyesOverlay) -> Result[bytes]:
        return self.request_image_from_both(Routes.EYES, image, overlay)

    def face_detection(self, image: str) -> Result[JSON]:
        """Detect a face; see ``schemas.FaceDetection`` for the result shape."""
        return self._post(Routes.FACEDETECTION, {"images": [image]}, ReturnMethod.JSON)

    def face_magik(
        self,
        image: str,
        text: str | None = None,
        option: int | None = None,
    ) -> Result[bytes]:
        body = {"images": [image], "args": _args(text=text, option=option)}
        return self.fetch_image(Routes.FACEMAGIK, body)

    def face_overlay(self, source_image: str, overlay_image: str) -> Result[bytes]:
        return self.fetch_image(Routes.FACEOVERLAY, {"images": [source_image, overlay_image]})

    def glitch(
        self,
        image: str,
        iterations: int | None = None,
        amount: int | None = None,
    ) -> Result[bytes]:
        body = {"images": [image], "args": _args(iterations=iterations, amount=amount)}
        return self.fetch_image(Routes.GLITCH, body)

    def glow(self, image: str, amount: int | None = None) -> Result[bytes]:
        return self.fetch_image(Routes.GLOW, {"images": [image], "args": _args(text=amount)})

    def hacker(self, text: str, template: int) -> Result[bytes]:
        return self.fetch_image(Routes.HACKER, {"args": {"text": text, "template": template}})

    def image_script(
        self,
        script: str,
        inject: Mapping[str, str | int | float] | None = None,
    ) -> Result[ImageScriptResult]:
        """Run an ImageScript program, optionally with injected variables.

        The output format comes from the response content type (PNG unless
        fAPI says GIF); timings and memory come from ``x-imagescript-*``.
        """
        body = {"args": _args(text=script, inject=dict(inject) if inject else None)}
        pending = self.request(
            Request(
                method=HttpMethod.POST,
                path=Routes.IMAGESCRIPT,
                body=body,
                return_type=ReturnMethod.BODY,
                return_headers=True,
            )
        )
        return self._then(pending, _image_script_result)

    def lego(self, image: str, resolution: int | None = None) -> Result[bytes]:
        return self.fetch_image(Routes.LEGO, {"images": [image], "args": _args(text=resolution)})

    def magik_script(
        self,
        image: str,
        text: str,
        options: Sequence[str] | None = None,
        size: str | None = None,
        gif: bool | None = None,
    ) -> Result[bytes]:
        body = {
            "images": [image],
            "args": _args(
                text=text,
                options=list(options) if options is not None else None,
                size=size,
                gif=gif,
            ),
        }
        return self.fetch_image(Routes.MAGIKSCRIPT, body)

    def pixelate(self, image: str, amount: int | None = None) -> Result[bytes]:
        return self.fetch_image(Routes.PIXELATE, {"images": [image], "args": _args(amount=amount)})

    def pne(self, image: str, option: int | None = None) -> Result[bytes]:
        return self.fetch_image(Routes.PNE, {"images": [image], "args": _args(option=option)})

    def proxy(self, url: str, body: JSON = None) -> Result[bytes]:
        """Have fAPI POST *body* to *url* and relay the raw answer."""
        return self._post(Routes.PROXY, _args(body=body), query={"url": url})

    def quote(self, options: QuoteOptions | Mapping[str, Any]) -> Result[bytes]:
        """Render a chat-message quote card."""
        if isinstance(options, QuoteOptions):
            args = options.to_wire()
        else:
            args = dict(options)
        return self.fetch_image(Routes.QUOTE, {"args": args})

    def racecard(self, light: str, dark: str) -> Result[bytes]:
        return self.fetch_image(Routes.RACECARD, {"args": {"text": [light, dark]}})

    def rextester(self, language: str, code: str) -> Result[JSON]:
        body = {"args": {"language": language, "text": code}}
        return self._post(Routes.REXTESTER, body, ReturnMethod.JSON)

    def rtx(self, before: str, after: str) -> Result[bytes]:
        return self.fetch_image(Routes.RTX, {"images": [before, after]})

    def screenshot(
        self,
        url: str,
        wait: int | None = None,
        allow_nsfw: bool | None = None,
    ) -> Result[bytes]:
        """Screenshot *url*, waiting *wait* milliseconds after load."""
        body = {"args": _args(text=url, wait=wait, allowNSFW=allow_nsfw)}
        return self.fetch_image(Routes.SCREENSHOT, body)

    def snapchat(
        self,
        image: str,
        filter: str | None = None,
        snow: bool | None = None,
    ) -> Result[bytes]:
        body = {"images": [image], "args": _args(text=filter, snow=snow)}
        return self.fetch_image(Routes.SNAPCHAT, body)

    def steam_playing(self, game: str) -> Result[JSON]:
        return self._post(
            Routes.STEAMPLAYING,
            {"args": {"text": game}},
            ReturnMethod.JSON,
            query={"json": True},
        )

    def thinking(self, image: str, level: str | None = None) -> Result[bytes]:
        return self.fetch_image(Routes.THINKING, {"images": [image], "args": _args(level=level)})

    def urban_dictionary(self, query: str) -> Result[JSON]:
        """Definitions; see ``schemas.UrbanDictionaryResult``."""
        return self._post(Routes.URBANDICTIONARY, {"args": {"text": query}}, ReturnMethod.JSON)

    def urlify(self, url: str) -> Result[str]:
        return self._post(Routes.URLIFY, {"args": {"text": url}}, ReturnMethod.TEXT)

    def wikihow(self, query: str) -> Result[JSON]:
        return self._post(Routes.WIKIHOW, {"args": {"text": query}}, ReturnMethod.JSON)

    # -- image from text -----------------------------------------------------

    def change_my_mind(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.CHANGEMYMIND, text)

    def days(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.DAYS, text)

    def grill(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.GRILL, text)

    def image_tag_parser(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.IMAGETAGPARSER, text)

    def logout(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.LOGOUT, text)

    def memorial(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.MEMORIAL, text)

    def presidential(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.PRESIDENTIAL, text)

    def real_fact(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.REALFACT, text)

    def recaptcha(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.RECAPTCHA, text)

    def simpsons_disabled(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.SIMPSONSDISABLED, text)

    def sonic(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.SONIC, text)

    def thonkify(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.THONKIFY, text)

    def wonka(self, text: str) -> Result[bytes]:
        return self.request_image_from_text(Routes.WONKA, text)

    # -- image and text ------------------------------------------------------

    def consent(self, image: str, text: str) -> Result[bytes]:
        return self.request_image_from_both(Routes.CONSENT, image, text)

    def pornhub(self, image: str, text: str) -> Result[bytes]:
        return self.request_image_from_both(Routes.PORNHUB, image, text)

    def reminder(self, image: str, text: str) -> Result[bytes]:
        return self.request_image_from_both(Routes.REMINDER, image, text)

    def retro(self, image: str, text: str) -> Result[bytes]:
        return self.request_image_from_both(Routes.RETRO, image, text)

    def shooting(self, image: str, text: str) -> Result[bytes]:
        return self.request_image_from_both(Routes.SHOOTING, image, text)

    def watchmojo(self, image: str, text: str) -> Result[bytes]:
        return self.request_image_from_both(Routes.WATCHMOJO, image, text)

    # -- image from image ----------------------------------------------------

    def nine_gag(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes._9GAG, image)

    def adidas(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.ADIDAS, image)

    def admin_walk(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.ADW, image)

    def ai_magik(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.AIMAGIK, image)

    def ajit(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.AJIT, image)

    def america(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.AMERICA, image)

    def analysis(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.ANALYSIS, image)

    def austin(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.AUSTIN, image)

    def autism(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.AUTISM, image)

    def bandicam(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.BANDICAM, image)

    def bernie(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.BERNIE, image)

    def binoculars(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.BINOCULARS, image)

    def blackify(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.BLACKIFY, image)

    def black_panther(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.BLACKPANTHER, image)

    def bob_ross(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.BOBROSS, image)

    def cool_guy(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.COOLGUY, image)

    def depression(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.DEPRESSION, image)

    def disabled(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.DISABLED, image)

    def dork(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.DORK, image)

    def edges(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.EDGES, image)

    def edges2emojis(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.EDGES2EMOJIS, image)

    def edges2emojis_gif(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.EDGES2EMOJISGIF, image)

    def edges2porn(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.EDGES2PORN, image)

    def edges2porn_gif(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.EDGES2PORNGIF, image)

    def excuse(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.EXCUSE, image)

    def face_swap(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.FACESWAP, image)

    def gaben(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.GABEN, image)

    def gay(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.GAY, image)

    def god(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.GOD, image)

    def goldstar(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.GOLDSTAR, image)

    def hawking(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.HAWKING, image)

    def hypercam(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.HYPERCAM, image)

    def idubbbz(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.IDUBBBZ, image)

    def ifunny(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.IFUNNY, image)

    def israel(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.ISRAEL, image)

    def jack(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.JACK, image)

    def jackoff(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.JACKOFF, image)

    def jesus(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.JESUS, image)

    def keemstar(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.KEEMSTAR, image)

    def keemstar2(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.KEEMSTAR2, image)

    def kekistan(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.KEKISTAN, image)

    def kirby(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.KIRBY, image)

    def linus(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.LINUS, image)

    def logan(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.LOGAN, image)

    def miranda(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.MIRANDA, image)

    def mistake(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.MISTAKE, image)

    def nooseguy(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.NOOSEGUY, image)

    def north_korea(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.NORTHKOREA, image)

    def old_guy(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.OLDGUY, image)

    def owo(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.OWO, image)

    def perfection(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.PERFECTION, image)

    def pistol(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.PISTOL, image)

    def portal(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.PORTAL, image)

    def resize(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.RESIZE, image)

    def respects(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.RESPECTS, image)

    def russia(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.RUSSIA, image)

    def shit(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.SHIT, image)

    def shotgun(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.SHOTGUN, image)

    def smg(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.SMG, image)

    def spain(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.SPAIN, image)

    def starman(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.STARMAN, image)

    def stock(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.STOCK, image)

    def supreme(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.SUPREME, image)

    def trans(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.TRANS, image)

    def trump(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.TRUMP, image)

    def ugly(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.UGLY, image)

    def uk(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.UK, image)

    def unmagik(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.UNMAGIK, image)

    def ussr(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.USSR, image)

    def vending(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.VENDING, image)

    def wheeze(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.WHEEZE, image)

    def wth(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.WTH, image)

    def yusuke(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.YUSUKE, image)

    def zoom(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.ZOOM, image)

    def zuckerberg(self, image: str) -> Result[bytes]:
        return self.request_image_from_image(Routes.ZUCKERBERG, image)
