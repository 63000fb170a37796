"""
Speaker attribution endpoint tests.
"""

from consultscribe.core.config import reset_settings

CONSULTATION = (
    "Hello John, how are you feeling today?\n"
    "I've been having headaches and a sore throat.\n"
    "Any fever or cough?\n"
    "Yes, mild fever since yesterday."
)


def test_classify_transcript(client):
    response = client.post("/speakers/classify", json={"transcript": CONSULTATION})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Speakers attributed"

    data = body["data"]
    assert [u["speaker"] for u in data["utterances"]] == ["Doctor", "Patient", "Doctor", "Patient"]
    assert data["labeled_transcript"].startswith("[Doctor]: Hello John")
    assert data["language"] == "en-IN"
    assert data["patient_info"]["name"] == "John"
    assert data["correction_applied"] is False
    assert data["correction_note"] is None


def test_classify_utterance_records(client):
    payload = {
        "utterances": [
            {"speaker": "Doctor", "text": "Any fever?"},
            {"transcript": "Yes, since Monday.", "ts_start": 1.5, "ts_end": 2.0},
            "Patient: Thanks.",
        ]
    }
    response = client.post("/speakers/classify", json=payload)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["utterances"] == [
        {"speaker": "Doctor", "text": "Any fever?"},
        {"speaker": "Patient", "text": "Yes, since Monday."},
        {"speaker": "Patient", "text": "Thanks."},
    ]
    assert data["patient_info"] is None


def test_classify_remaps_speaker_indices(client):
    payload = {
        "transcript": "[Speaker 1]: I've been fine.\n[Speaker 2]: Take these tablets daily.",
        "remap_speaker_indices": True,
    }
    data = client.post("/speakers/classify", json=payload).json()["data"]
    assert [u["speaker"] for u in data["utterances"]] == ["Doctor", "Patient"]


def test_classify_requires_exactly_one_input(client):
    both = client.post("/speakers/classify", json={"transcript": "Hi", "utterances": ["Hi"]})
    neither = client.post("/speakers/classify", json={})
    for response in (both, neither):
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_INPUT"
        assert response.json()["success"] is False


def test_classify_rejects_malformed_body(client):
    response = client.post("/speakers/classify", json={"utterances": "not a list"})
    assert response.status_code == 422
    assert response.json()["error"] == "INVALID_INPUT"


def test_classify_rejects_oversized_transcript(monkeypatch, client):
    monkeypatch.setenv("SPEAKER_MAX_TRANSCRIPT_CHARS", "20")
    reset_settings()
    response = client.post("/speakers/classify", json={"transcript": CONSULTATION})
    assert response.status_code == 413
    body = response.json()
    assert body["error"] == "PAYLOAD_TOO_LARGE"
    assert body["details"]["limit"] == 20


def test_correction_requested_but_disabled(client):
    response = client.post(
        "/speakers/classify", json={"transcript": CONSULTATION, "use_llm_correction": True}
    )
    data = response.json()["data"]
    assert data["correction_applied"] is False
    assert data["correction_note"] == "Speaker correction is not configured"


def test_classify_empty_transcript(client):
    data = client.post("/speakers/classify", json={"transcript": ""}).json()["data"]
    assert data["labeled_transcript"] == ""
    assert data["utterances"] == []


def test_remap(client):
    response = client.post("/speakers/remap", json={"transcript": "[Speaker 1]: Hi\n\n[Speaker 2]: Hello"})
    assert response.json()["data"]["transcript"] == "[Doctor]: Hi\n\n[Patient]: Hello"


def test_patient_info(client):
    found = client.post("/speakers/patient-info", json={"transcript": "Hello Mr. Sharma, please sit."})
    assert found.json()["data"]["name"] == "Sharma"

    missing = client.post("/speakers/patient-info", json={"transcript": "I've been coughing."})
    assert missing.status_code == 200
    assert missing.json()["data"] is None
    assert missing.json()["message"] == "No patient name found"


def test_language(client):
    response = client.post("/speakers/language", json={"text": "मुझे बुखार है"})
    assert response.json()["data"]["locale"] == "hi-IN"


def test_language_requires_text(client):
    response = client.post("/speakers/language", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "INVALID_INPUT"


def test_diarized(client):
    words = [
        {"word": "Hello.", "speakerTag": 1, "startTime": 0.0, "endTime": 0.5},
        {"word": "Hi", "speaker_tag": 2, "start_time": 0.6, "end_time": 0.8},
    ]
    plain = client.post("/speakers/diarized", json={"words": words}).json()["data"]
    assert plain["transcript"] == "[Speaker 1]: Hello.\n\n[Speaker 2]: Hi"

    remapped = client.post("/speakers/diarized", json={"words": words, "remap_roles": True}).json()["data"]
    assert remapped["transcript"] == "[Doctor]: Hello.\n\n[Patient]: Hi"


def test_extract(client):
    payload = {
        "utterances": [
            {"speaker": "Patient", "text": "I have a cough and fever."},
            {"speaker": "Doctor", "text": "Take Azithromycin 500mg once daily for 3 days."},
        ]
    }
    data = client.post("/speakers/extract", json=payload).json()["data"]
    assert data["symptoms"] == ["cough", "fever"]
    assert data["medications"] == [
        {"name": "Azithromycin", "dose": "500mg", "frequency": "once daily", "duration": "3 days"}
    ]


def test_extract_rejects_untrusted_label(client):
    payload = {"utterances": [{"speaker": "Speaker 1", "text": "Take this."}]}
    response = client.post("/speakers/extract", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_SPEAKER_LABEL"


def test_utterance_size_counts_raw_text(monkeypatch, client):
    monkeypatch.setenv("SPEAKER_MAX_TRANSCRIPT_CHARS", "20")
    reset_settings()
    padded = {"utterances": [{"text": "Hi" + " " * 30}, "   Okay   "]}
    response = client.post("/speakers/classify", json=padded)
    assert response.status_code == 413
    assert response.json()["details"]["length"] == 42
