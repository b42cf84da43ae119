"""
Editor Service

Business logic for video editor projects: validation, default settings,
initial clip probing, timeline duration bookkeeping and DTO mapping.
"""

from typing import Any, Dict, List
import copy
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from constants import EditorDefaults, TextPresets, TransitionDefaults
from domain.value_objects import VideoProjectStatus
from dtos.response import (
    ProjectDetailDto,
    ProjectDto,
    TextOverlayDto,
    TransitionDto,
    VideoMetadataDto,
)
from exceptions import (
    ClipNotFoundError,
    InvalidTextOverlayError,
    InvalidTransitionError,
    ProjectNotFoundError,
    StorageError,
    VideoMetadataError,
)
from models import VideoProject
from repositories import VideoProjectRepository
from services.editor_validator import EditorValidator
from utils.logging_utils import log_operation
from utils.uuid_helper import ensure_utc, generate_uuid
from utils.video_metadata import get_video_metadata

logger = logging.getLogger(__name__)


def clip_duration(clip: Dict[str, Any]) -> float:
    """Length a clip occupies on the timeline; falls back to its trimmed source range"""
    duration = clip.get("duration")
    if duration is None:
        duration = clip.get("endTime", 0) - clip.get("startTime", 0)
    return duration


def calculate_timeline_duration(timeline: Dict[str, Any]) -> float:
    """End of the last clip on the timeline (``position + duration``), 0 when empty"""
    return max(
        (clip.get("position", 0) + clip_duration(clip) for clip in timeline.get("clips") or []),
        default=0,
    )


def to_project_dto(project: VideoProject) -> ProjectDto:
    return ProjectDto(
        id=project.id,
        name=project.name,
        description=project.description or "",
        thumbnail=project.thumbnail,
        status=project.status,
        duration=(project.timeline or {}).get("duration", 0),
        created_at=ensure_utc(project.created_at),
        updated_at=ensure_utc(project.updated_at),
    )


def to_project_detail_dto(project: VideoProject) -> ProjectDetailDto:
    summary = to_project_dto(project)
    return ProjectDetailDto(
        **summary.model_dump(),
        source_video_url=project.source_video_url,
        settings=project.settings,
        timeline=project.timeline,
    )


class EditorService:
    """Service for video editor projects."""

    def __init__(self, db: Session):
        """
        Initialize EditorService.

        Args:
            db: Database session
        """
        self.db = db
        self.repository = VideoProjectRepository(db)

    def list_projects(self) -> List[ProjectDto]:
        return [to_project_dto(project) for project in self.repository.list_recent()]

    @log_operation("create_project")
    def create_project(self, data: Dict[str, Any]) -> ProjectDto:
        """
        Create a new video project.

        When ``sourceVideoUrl`` is given the source is probed with ffprobe
        and, if that succeeds, added as the first clip. A failed probe only
        logs a warning.

        Args:
            data: ``{name, description, sourceVideoUrl, settings}`` with camelCase keys

        Returns:
            The created project as ProjectDto

        Raises:
            InvalidProjectDataError: Bad name or frame rate
            ValidationError: Bad source URL or resolution
            StorageError: Database write failed
        """
        EditorValidator.validate_create_project(data)

        settings = {**EditorDefaults.settings(), **(data.get("settings") or {})}
        timeline = EditorDefaults.timeline()
        source_url = data.get("sourceVideoUrl")

        if source_url:
            metadata = get_video_metadata(source_url)
            if metadata and metadata.get("duration"):
                duration = metadata["duration"]
                timeline["clips"].append({
                    "id": generate_uuid(),
                    "sourceUrl": source_url,
                    "startTime": 0,
                    "endTime": duration,
                    "position": 0,
                    "duration": duration,
                    "volume": 1,
                })
                timeline["duration"] = calculate_timeline_duration(timeline)
                if metadata.get("width") and metadata.get("height"):
                    settings["resolution"] = {"width": metadata["width"], "height": metadata["height"]}
                if metadata.get("fps"):
                    settings["frameRate"] = metadata["fps"]
            else:
                logger.warning(f"Could not read source video metadata for {source_url}, creating empty timeline")

        project = VideoProject(
            id=generate_uuid(),
            name=data["name"],
            description=data.get("description") or "",
            status=VideoProjectStatus.DRAFT.value,
            source_video_url=source_url,
            settings=settings,
            timeline=timeline,
        )
        self._save(lambda: self.repository.create(project), "create")
        logger.info(f"Video project created: {project.id} ({project.name})")
        return to_project_dto(project)

    def get_project(self, project_id: str) -> ProjectDetailDto:
        return to_project_detail_dto(self._get_or_raise(project_id))

    @log_operation("update_project")
    def update_project(self, project_id: str, updates: Dict[str, Any]) -> ProjectDetailDto:
        """
        Apply a partial update to a project.

        ``settings`` is merged over the stored settings; ``timeline`` replaces
        the stored timeline and has its duration recalculated.

        Raises:
            ProjectNotFoundError: Unknown project
            InvalidProjectDataError / InvalidTimelineError: Invalid update
        """
        EditorValidator.validate_update_project(updates)
        project = self._get_or_raise(project_id)

        for field in ("name", "status", "thumbnail"):
            if field in updates:
                setattr(project, field, updates[field])
        if "description" in updates:
            project.description = updates["description"] or ""

        if updates.get("settings"):
            project.settings = {**project.settings, **updates["settings"]}

        if "timeline" in updates:
            timeline = dict(updates["timeline"])
            timeline["duration"] = calculate_timeline_duration(timeline)
            project.timeline = timeline

        self._save(lambda: self.repository.update(project), "update")
        logger.info(f"Video project updated: {project_id}")
        return to_project_detail_dto(project)

    @log_operation("delete_project")
    def delete_project(self, project_id: str) -> None:
        project = self._get_or_raise(project_id)
        self._save(lambda: self.repository.delete(project), "delete")
        logger.info(f"Video project deleted: {project_id}")

    def get_video_metadata(self, video_path: str) -> VideoMetadataDto:
        """
        Probe a video file or URL with ffprobe.

        Raises:
            VideoMetadataError: ffprobe is missing or could not read the source
        """
        metadata = get_video_metadata(video_path)
        if not metadata:
            raise VideoMetadataError(video_path)
        return VideoMetadataDto.model_validate(metadata)

    def list_text_overlays(self, project_id: str) -> List[TextOverlayDto]:
        project = self._get_or_raise(project_id)
        overlays = (project.timeline or {}).get("textOverlays") or []
        return [TextOverlayDto.model_validate(overlay) for overlay in overlays]

    @log_operation("add_text_overlay")
    def add_text_overlay(self, project_id: str, data: Dict[str, Any]) -> TextOverlayDto:
        """
        Append a text overlay built from a preset.

        The preset supplies position, style, animation and duration; values in
        ``data`` override it. A full-duration preset runs to the end of the
        timeline.

        Args:
            data: ``{content, startTime, duration, position, style, preset}``

        Raises:
            ProjectNotFoundError: Unknown project
            InvalidTextOverlayError: Unknown preset or invalid overlay
        """
        preset_name = data.get("preset") or TextPresets.DEFAULT_PRESET
        preset = TextPresets.PRESETS.get(preset_name)
        if preset is None:
            raise InvalidTextOverlayError(f"Unknown preset: {preset_name}")
        for field in ("position", "style"):
            if data.get(field) is not None and not isinstance(data[field], dict):
                raise InvalidTextOverlayError(f"{field} must be an object")

        project = self._get_or_raise(project_id)
        timeline = copy.deepcopy(project.timeline or EditorDefaults.timeline())

        start = data["startTime"]
        duration = data.get("duration")
        if duration is None:
            duration = preset["duration"]
            if duration == TextPresets.FULL_DURATION:
                duration = timeline.get("duration", 0) - start

        overlay = {
            "id": generate_uuid(),
            "text": data["content"],
            "startTime": start,
            "endTime": start + duration,
            "position": {**preset["position"], **(data.get("position") or {})},
            "style": {**TextPresets.default_style(), **preset["style"], **(data.get("style") or {})},
            "preset": preset_name,
        }
        if "animation" in preset:
            overlay["animation"] = dict(preset["animation"])
        EditorValidator.validate_text_overlay(overlay)

        timeline.setdefault("textOverlays", []).append(overlay)
        project.timeline = timeline
        self._save(lambda: self.repository.update(project), "update")
        logger.info(f"Text overlay {overlay['id']} added to project {project_id}")
        return TextOverlayDto.model_validate(overlay)

    def list_transitions(self, project_id: str) -> List[TransitionDto]:
        project = self._get_or_raise(project_id)
        transitions = (project.timeline or {}).get("transitions") or []
        return [TransitionDto.model_validate(transition) for transition in transitions]

    @log_operation("add_transition")
    def add_transition(self, project_id: str, data: Dict[str, Any]) -> TransitionDto:
        """
        Add a transition between two clips of the project timeline.

        The transition starts where the outgoing clip ends and may last at
        most half of the shorter clip. One transition is allowed per clip pair.

        Args:
            data: ``{type, fromClipId, toClipId, duration, params}``

        Raises:
            InvalidTransitionError: Bad type, missing clip IDs, bad duration or duplicate
            ClipNotFoundError: Either clip is not on the timeline
            ProjectNotFoundError: Unknown project
        """
        EditorValidator.validate_transition_request(data)
        project = self._get_or_raise(project_id)
        timeline = copy.deepcopy(project.timeline or EditorDefaults.timeline())

        clips = {clip.get("id"): clip for clip in timeline.get("clips") or []}
        from_clip, to_clip = clips.get(data["fromClipId"]), clips.get(data["toClipId"])
        if from_clip is None or to_clip is None:
            raise ClipNotFoundError()

        duration = data.get("duration")
        if duration is None:
            duration = TransitionDefaults.DEFAULT_DURATION
        EditorValidator.validate_transition_duration(duration, clip_duration(from_clip), clip_duration(to_clip))

        transitions = timeline.setdefault("transitions", [])
        for existing in transitions:
            if existing.get("fromClipId") == data["fromClipId"] and existing.get("toClipId") == data["toClipId"]:
                raise InvalidTransitionError(
                    "A transition already exists between these clips", code="TRANSITION_EXISTS"
                )

        transition = {
            "id": generate_uuid(),
            "type": data["type"],
            "duration": duration,
            "position": from_clip.get("position", 0) + clip_duration(from_clip),
            "fromClipId": data["fromClipId"],
            "toClipId": data["toClipId"],
            "params": data.get("params") or {},
        }
        transitions.append(transition)
        project.timeline = timeline
        self._save(lambda: self.repository.update(project), "update")
        logger.info(f"Transition {transition['id']} ({transition['type']}) added to project {project_id}")
        return TransitionDto.model_validate(transition)

    def _get_or_raise(self, project_id: str) -> VideoProject:
        project = self.repository.get_by_id(project_id)
        if not project:
            raise ProjectNotFoundError(project_id)
        return project

    def _save(self, write, operation: str) -> None:
        try:
            write()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {operation} video project: {e}", exc_info=True)
            raise StorageError(operation, "database error") from e
