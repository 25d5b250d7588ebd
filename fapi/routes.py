"""fAPI endpoint paths, relative to the base URL."""

from __future__ import annotations

BASE_URL = "https://fapi.dreadful.tech/v2"


class Routes:
    PATHLIST = "/pathlist"
    _4CHAN = "/4chan"
    _9GAG = "/9gag"
    ADIDAS = "/adidas"
    ADW = "/adw"
    AIMAGIK = "/aimagik"
    AJIT = "/ajit"
    AMERICA = "/america"
    ANALYSIS = "/analysis"
    AUSTIN = "/austin"
    AUTISM = "/autism"
    BANDICAM = "/bandicam"
    BERNIE = "/bernie"
    BINOCULARS = "/binoculars"
    BLACKIFY = "/blackify"
    BLACKPANTHER = "/blackpanther"
    BOBROSS = "/bobross"
    BUZZFEED = "/buzzfeed"
    CHANGEMYMIND = "/changemymind"
    COMPOSITE = "/composite"
    CONSENT = "/consent"
    COOLGUY = "/coolguy"
    DAYS = "/days"
    DEEPFRY = "/deepfry"
    DEPRESSION = "/depression"
    DISABLED = "/disabled"
    DORK = "/dork"
    DUCKDUCKGO = "/duckduckgo"
    DUCKDUCKGOIMAGES = "/duckduckgoimages"
    EDGES = "/edges"
    EDGES2EMOJIS = "/edges2emojis"
    EDGES2EMOJISGIF = "/edges2emojisgif"
    EDGES2PORN = "/edges2porn"
    EDGES2PORNGIF = "/edges2porngif"
    EMOJIFY = "/emojify"
    EMOJIMOSAIC = "/emojimosaic"
    EVAL = "/eval"
    EVALMAGIK = "/evalmagik"
    EXCUSE = "/excuse"
    EYES = "/eyes"
    FACEDETECTION = "/facedetection"
    FACEMAGIK = "/facemagik"
    FACEOVERLAY = "/faceoverlay"
    FACESWAP = "/faceswap"
    GABEN = "/gaben"
    GAY = "/gay"
    GLITCH = "/glitch"
    GLOW = "/glow"
    GOD = "/god"
    GOLDSTAR = "/goldstar"
    GRILL = "/grill"
    HACKER = "/hacker"
    HAWKING = "/hawking"
    HYPERCAM = "/hypercam"
    IDUBBBZ = "/idubbbz"
    IFUNNY = "/ifunny"
    IMAGESCRIPT = "/imagescript"
    IMAGETAGPARSER = "/imagetagparser"
    ISRAEL = "/israel"
    JACK = "/jack"
    JACKOFF = "/jackoff"
    JESUS = "/jesus"
    KEEMSTAR = "/keemstar"
    KEEMSTAR2 = "/keemstar2"
    KEKISTAN = "/kekistan"
    KIRBY = "/kirby"
    LEGO = "/lego"
    LINUS = "/linus"
    LOGAN = "/logan"
    LOGOUT = "/logout"
    MAGIKSCRIPT = "/magikscript"
    MEMORIAL = "/memorial"
    MIRANDA = "/miranda"
    MISTAKE = "/mistake"
    NOOSEGUY = "/nooseguy"
    NORTHKOREA = "/northkorea"
    OLDGUY = "/oldguy"
    OWO = "/owo"
    PERFECTION = "/perfection"
    PISTOL = "/pistol"
    PIXELATE = "/pixelate"
    PNE = "/pne"
    PORNHUB = "/pornhub"
    PORTAL = "/portal"
    PRESIDENTIAL = "/presidential"
    PROXY = "/proxy"
    QUOTE = "/quote"
    RACECARD = "/racecard"
    REALFACT = "/realfact"
    RECAPTCHA = "/recaptcha"
    REMINDER = "/reminder"
    RESIZE = "/resize"
    RESPECTS = "/respects"
    RETRO = "/retro"
    REXTESTER = "/rextester"
    RTX = "/rtx"
    RUSSIA = "/russia"
    SCREENSHOT = "/screenshot"
    SHIT = "/shit"
    SHOOTING = "/shooting"
    SHOTGUN = "/shotgun"
    SIMPSONSDISABLED = "/simpsonsdisabled"
    SMG = "/smg"
    SNAPCHAT = "/snapchat"
    SONIC = "/sonic"
    SPAIN = "/spain"
    STARMAN = "/starman"
    STEAMPLAYING = "/steamplaying"
    STOCK = "/stock"
    SUPREME = "/supreme"
    THINKING = "/thinking"
    THONKIFY = "/thonkify"
    TRANS = "/trans"
    TRUMP = "/trump"
    UGLY = "/ugly"
    UK = "/uk"
    UNMAGIK = "/unmagik"
    URBANDICTIONARY = "/urbandictionary"
    URLIFY = "/urlify"
    USSR = "/ussr"
    VENDING = "/vending"
    WATCHMOJO = "/watchmojo"
    WHEEZE = "/wheeze"
    WIKIHOW = "/wikihow"
    WONKA = "/wonka"
    WTH = "/wth"
    YUSUKE = "/yusuke"
    ZOOM = "/zoom"
    ZUCKERBERG = "/zuckerberg"
