"""
Shared key names for the vendor JSON schemas and the XMLTV output
"""

# Feed JSON keys
CALL_SIGN = "callSign"
CHANNEL = "channel"
CHANNEL_ID = "channelId"
CHANNEL_NO = "channelNo"
CHANNELS = "channels"
CONTENT = "content"
DATA = "data"
DESC = "desc"
END_DATE = "end_date"
END_TIME = "endTime"
EVENTS = "events"
ITEMS = "items"
LOGO = "logo"
NAME = "name"
NETWORK_NAME = "networkName"
PROGRAM = "program"
PROGRAM_SCHEDULES = "programSchedules"
SHORT_DESC = "shortDesc"
SOURCE_ID = "sourceId"
START_DATE = "start_date"
START_TIME = "startTime"
STREAMS = "streams"
THUMBNAIL = "thumbnail"
TITLE = "title"

# XMLTV element and attribute names
XML_CHANNEL = "channel"
XML_DESC = "desc"
XML_DISPLAY_NAME = "display-name"
XML_ICON = "icon"
XML_ID = "id"
XML_LANG = "lang"
XML_PROGRAMME = "programme"
XML_SRC = "src"
XML_START = "start"
XML_STOP = "stop"
XML_TITLE = "title"
XML_TV = "tv"
DEFAULT_LANG = "en"
