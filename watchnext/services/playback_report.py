"""
Service de traitement des rapports de lecture.

Point d'entrée des surfaces externes (CLI, API web) : résout la vidéo dans le
catalogue de titres, délègue au moteur de réconciliation, puis marque la vidéo
comme vue quand la lecture est terminée.
"""

from loguru import logger

from watchnext.core.entities.video import Video
from watchnext.core.errors import InvalidInputError
from watchnext.core.ports.repositories import IVideoRepository
from watchnext.core.value_objects.playback import PlaybackBucket, PlaybackReport, PlayerState
from watchnext.services.reconciler import ReconcileAction, ReconciliationService


class UnknownVideoError(InvalidInputError):
    """La vidéo n'existe pas dans le catalogue de titres."""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Vidéo inconnue : {video_id}")


class PlaybackReportService:
    """Orchestration d'un rapport de lecture."""

    def __init__(
        self,
        reconciler: ReconciliationService,
        video_repo: IVideoRepository,
        promote_next_episode: bool = True,
    ) -> None:
        self._reconciler = reconciler
        self._video_repo = video_repo
        self._promote_next_episode = promote_next_episode

    def handle(
        self,
        video_id: str,
        position_ms: int,
        state: PlayerState | str | None = None,
    ) -> ReconcileAction:
        """
        Traite un rapport de lecture.

        Args:
            video_id: Identifiant du contenu
            position_ms: Position reportée en millisecondes
            state: État du lecteur (PlayerState ou valeur brute)

        Returns:
            L'action appliquée au flux.

        Raises:
            UnknownVideoError: Video absente du catalogue de titres.
        """
        if not isinstance(state, PlayerState):
            state = PlayerState.parse(state)

        video = self._video_repo.get_by_id(video_id)
        if video is None:
            raise UnknownVideoError(video_id)

        report = PlaybackReport(video_id=video_id, position_ms=position_ms, state=state)
        series_lookup = self._video_repo if self._promote_next_episode else None
        result = self._reconciler.reconcile(video, report, series_lookup)

        if result.bucket is PlaybackBucket.FINISHED and not video.watched:
            self._video_repo.mark_watched(video.id)
            logger.debug(f"Vidéo {video.id} marquée comme vue")
        return result

    def remove(self, video_ids: list[str]) -> list[ReconcileAction]:
        """Supprime des vidéos du flux par identifiant."""
        videos = []
        for video_id in video_ids:
            video = self._video_repo.get_by_id(video_id)
            if video is None:
                raise UnknownVideoError(video_id)
            videos.append(video)
        return self._reconciler.remove_videos(videos)

    def series_episodes_in_feed(self, series_id: str) -> list[Video]:
        """Épisodes d'une série actuellement visibles dans le flux."""
        episodes = self._video_repo.list_by_series(series_id)
        return self._reconciler.filter_in_feed(episodes)
