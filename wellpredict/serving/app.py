import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Response, status

from wellpredict.config import HISTORY_PATH, PREDICTION_DELAY_SECONDS, API_TOKENS, TILE_LAYERS
from wellpredict.errors import PredictionValidationError
from wellpredict.prediction.analysis import summarize_history
from wellpredict.prediction.controller import PredictionController
from wellpredict.prediction.history_store import JsonHistoryStore
from wellpredict.prediction.schemas import LifecycleState, PredictionResult, PredictionStatus
from wellpredict.reports.pdf_report import render_prediction_report
from wellpredict.serving.auth import get_current_user
from wellpredict.serving.schemas import (
    HealthResponse, HistorySummary,
    WeatherResponse, WeatherHistoryResponse,
    SoilRecord, SoilDataResponse,
    MarkerCreate, MarkerWithDistance, MarkerListResponse,
    ChatRequest, ChatResponse, FAQResponse, TranscriptResponse,
)
from wellpredict.services.chat import FAQ, ChatResponder
from wellpredict.services.geolocation import resolve_location
from wellpredict.services.mapping import MarkerBoard
from wellpredict.services.soil_catalog import filter_catalog, suitability_band
from wellpredict.services.weather import WeatherService, assess_weather_impact

logger = logging.getLogger(__name__)

controller = PredictionController(JsonHistoryStore(HISTORY_PATH), delay=PREDICTION_DELAY_SECONDS)
marker_board = MarkerBoard()
chat_responder = ChatResponder()
weather_service = WeatherService()


def get_controller() -> PredictionController:
    return controller


def get_marker_board() -> MarkerBoard:
    return marker_board


def get_chat_responder() -> ChatResponder:
    return chat_responder


def get_weather_service() -> WeatherService:
    return weather_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logger.info("Prediction history: %d records at %s", len(controller.history), HISTORY_PATH)
    if not API_TOKENS:
        logger.warning("No API tokens configured; dashboard routes are open.")
    yield
    if controller.pending_count:
        logger.info("Waiting for %d pending predictions …", controller.pending_count)
        await controller.wait()


app = FastAPI(
    title="Water Well Prediction API",
    description="Groundwater predictions, weather insights, soil data, site mapping and FAQ chat.",
    version="1.0.0",
    lifespan=lifespan,
)

router = APIRouter(dependencies=[Depends(get_current_user)])


@app.get("/health", response_model=HealthResponse)
async def health(ctrl: PredictionController = Depends(get_controller)):
    return HealthResponse(
        status="healthy",
        prediction_status=ctrl.status.value,
        history_size=len(ctrl.history),
        pending=ctrl.pending_count,
    )


# Predictions

@router.post("/predictions", response_model=LifecycleState, status_code=status.HTTP_202_ACCEPTED)
async def submit_prediction(response: Response,
                            payload: dict = Body(...),
                            wait: bool = Query(False, description="Block until the prediction resolves"),
                            ctrl: PredictionController = Depends(get_controller)):
    try:
        task = ctrl.submit(payload)
    except PredictionValidationError as e:
        logger.error("Prediction rejected: %s", e)
        raise HTTPException(status_code=422, detail=e.errors)

    if not wait:
        return ctrl.state

    await task
    state = ctrl.state
    if state.status is PredictionStatus.FAILED:
        raise HTTPException(status_code=500, detail=state.last_error)
    response.status_code = status.HTTP_200_OK
    return state


@router.get("/predictions/state", response_model=LifecycleState)
async def prediction_state(ctrl: PredictionController = Depends(get_controller)):
    return ctrl.state


@router.get("/predictions/history", response_model=list[PredictionResult])
async def prediction_history(ctrl: PredictionController = Depends(get_controller)):
    return ctrl.history


@router.get("/predictions/summary", response_model=HistorySummary)
async def prediction_summary(ctrl: PredictionController = Depends(get_controller)):
    return HistorySummary(**summarize_history(ctrl.history))


@router.delete("/predictions/current", response_model=LifecycleState)
async def clear_prediction(ctrl: PredictionController = Depends(get_controller)):
    ctrl.clear()
    return ctrl.state


@router.get("/predictions/{prediction_id}/report")
async def prediction_report(prediction_id: int,
                            ctrl: PredictionController = Depends(get_controller)):
    result = ctrl.find(prediction_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Prediction {prediction_id} not found")

    try:
        pdf = await asyncio.to_thread(render_prediction_report, result)
    except Exception as e:
        logger.error("Report rendering failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=water-well-prediction-report.pdf"},
    )


# Weather

@router.get("/weather/current", response_model=WeatherResponse)
async def current_weather(latitude: float | None = None,
                          longitude: float | None = None,
                          service: WeatherService = Depends(get_weather_service)):
    location = resolve_location(latitude, longitude)
    current = await service.get_current_weather(location.latitude, location.longitude)
    return WeatherResponse(location=location, current=current, impact=assess_weather_impact(current))


@router.get("/weather/history", response_model=WeatherHistoryResponse)
async def weather_history(latitude: float | None = None,
                          longitude: float | None = None,
                          days: int = Query(7, ge=1, le=31),
                          service: WeatherService = Depends(get_weather_service)):
    location = resolve_location(latitude, longitude)
    history = await service.get_weather_history(location.latitude, location.longitude, days=days)
    return WeatherHistoryResponse(location=location, days=history)


# Soil & rock reference data

@router.get("/soil-data", response_model=SoilDataResponse)
async def soil_data(search: str = "",
                    kind: str = Query("all", alias="type", pattern="^(all|soil|rock)$")):
    df = filter_catalog(search=search, kind=kind)
    items = [
        SoilRecord(**row, suitability_band=suitability_band(row["suitability"]))
        for row in df.to_dict(orient="records")
    ]
    return SoilDataResponse(count=len(items), items=items)


# Map markers

def _marker_listing(board: MarkerBoard, latitude: float | None, longitude: float | None) -> MarkerListResponse:
    origin = resolve_location(latitude, longitude)
    distances = board.distances_from(origin)
    markers = [
        MarkerWithDistance(**m.model_dump(), distance_km=distances.get(m.id))
        for m in board.markers
    ]
    return MarkerListResponse(origin=origin, markers=markers, tile_layers=TILE_LAYERS)


@router.get("/map/markers", response_model=MarkerListResponse)
async def list_markers(latitude: float | None = None,
                       longitude: float | None = None,
                       board: MarkerBoard = Depends(get_marker_board)):
    return _marker_listing(board, latitude, longitude)


@router.post("/map/markers", response_model=MarkerWithDistance, status_code=status.HTTP_201_CREATED)
async def add_marker(body: MarkerCreate, board: MarkerBoard = Depends(get_marker_board)):
    marker = board.add(body.latitude, body.longitude)
    return MarkerWithDistance(**marker.model_dump())


@router.delete("/map/markers/{marker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_marker(marker_id: int, board: MarkerBoard = Depends(get_marker_board)):
    if not board.remove(marker_id):
        raise HTTPException(status_code=404, detail=f"Marker {marker_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/map/markers", status_code=status.HTTP_204_NO_CONTENT)
async def clear_markers(board: MarkerBoard = Depends(get_marker_board)):
    board.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Chat

@router.get("/chat/faq", response_model=FAQResponse)
async def chat_faq():
    return FAQResponse(items=FAQ)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, responder: ChatResponder = Depends(get_chat_responder)):
    try:
        reply = await responder.send(request.message)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ChatResponse(reply=reply)


@router.post("/chat/faq/{index}", response_model=ChatResponse)
async def ask_faq(index: int, responder: ChatResponder = Depends(get_chat_responder)):
    try:
        reply = responder.ask_faq(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ChatResponse(reply=reply)


@router.get("/chat/transcript", response_model=TranscriptResponse)
async def chat_transcript(responder: ChatResponder = Depends(get_chat_responder)):
    return TranscriptResponse(messages=list(responder.transcript))


app.include_router(router)
