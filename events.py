# Socket event names (wire-level, shared with the web client)

LOGIN = "LOGIN"
DISPLAY_NAME = "DISPLAY_NAME"
GET_USERS = "GET_USERS"
USERS = "USERS"
SEARCH_USERS = "SEARCH_USERS"

CREATE_ROOM = "CREATE_ROOM"
CREATE_ROOM_SUCCESS = "CREATE_ROOM_SUCCESS"
CONNECT_TO_ROOM = "CONNECT_TO_ROOM"
LEAVE_ROOM = "LEAVE_ROOM"
ROOM_STATUS = "ROOM_STATUS"
SEND_ROOM_INVITES = "SEND_ROOM_INVITES"
ACCEPT_TRANSFER_REQUEST = "ACCEPT_TRANSFER_REQUEST"
REJECT_TRANSFER_REQUEST = "REJECT_TRANSFER_REQUEST"

SEND_FILE_REQUEST = "SEND_FILE_REQUEST"
FILE_ACCEPT = "FILE_ACCEPT"
FILE_REJECT = "FILE_REJECT"

RTC_DESCRIPTION_OFFER = "RTC_DESCRIPTION_OFFER"
RTC_DESCRIPTION_ANSWER = "RTC_DESCRIPTION_ANSWER"
ICE_CANDIDATE = "ICE_CANDIDATE"

ERROR = "ERROR"

# ROOM_STATUS types
USER_CONNECT = "USER_CONNECT"
USER_DISCONNECT = "USER_DISCONNECT"

FILE_EVENTS = (SEND_FILE_REQUEST, FILE_ACCEPT, FILE_REJECT)
RTC_EVENTS = (RTC_DESCRIPTION_OFFER, RTC_DESCRIPTION_ANSWER, ICE_CANDIDATE)
