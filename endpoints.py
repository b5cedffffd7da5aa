# Endpoints of the tablet's USB web interface; update if the firmware changes them.

BASE_URL = "http://10.11.99.1"

DOCUMENTS = {
    "root": {
        "method": "GET",
        "path": "/documents/",
    },
    "folder": {
        "method": "GET",
        "path": "/documents/{id}",
    },
}

DOWNLOAD = {
    "pdf": {
        "method": "GET",
        "path": "/download/{id}/pdf",
    },
}

UPLOAD = {
    "file": {
        "method": "POST",
        "path": "/upload",
    },
}

# Listing payload fields, spelled as the device sends them.
FIELD_ID = "ID"
FIELD_NAME = "VissibleName"
FIELD_TYPE = "Type"
FOLDER_TYPE = "CollectionType"
