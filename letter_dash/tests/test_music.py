from config import MELODY, TEMPO_MS
from music import AudioLoopScheduler
from conftest import FakeEngine


def test_start_resumes_suspended_engine_and_plays_on_tempo(music, engine, advance):
    assert music.start() is True
    assert music.playing
    assert engine.resumes == 1
    assert engine.tones == []            # first note one tempo step after start
    advance(TEMPO_MS)
    assert engine.tones == [MELODY[0]]
    advance(TEMPO_MS * 3)
    assert engine.tones == MELODY[:4]


def test_step_index_wraps(loop, engine, advance):
    music = AudioLoopScheduler(loop, engine_factory=lambda: engine, melody=[100.0, 200.0, 300.0], tempo_ms=10)
    music.start()
    advance(50)
    assert engine.tones == [100.0, 200.0, 300.0, 100.0, 200.0]
    assert music.step_index == 2


def test_engine_built_lazily_and_reused(loop, advance):
    built = []
    def factory():
        built.append(FakeEngine())
        return built[-1]
    music = AudioLoopScheduler(loop, engine_factory=factory)
    assert built == []
    music.start()
    music.stop()
    music.start()
    assert len(built) == 1
    assert built[0].resumes == 1      # already running the second time


def test_start_is_noop_when_playing_or_disabled(music, engine):
    assert music.start()
    assert music.start() is False
    music.stop()
    music.set_enabled(False)
    assert music.start() is False
    assert not music.playing


def test_disable_while_playing_stops_immediately(music, engine, advance):
    music.start()
    advance(TEMPO_MS)
    music.set_enabled(False)
    assert not music.playing
    advance(TEMPO_MS * 4)
    assert len(engine.tones) == 1


def test_enable_does_not_autostart(music):
    music.set_enabled(False)
    music.set_enabled(True)
    assert not music.playing
    assert music.state == "stopped"


def test_stop_is_idempotent_and_keeps_engine(music, engine, advance):
    music.stop()
    music.start()
    music.stop()
    music.stop()
    advance(TEMPO_MS * 2)
    assert engine.tones == []
    assert music.engine is engine
    assert not engine.closed


def test_failed_resume_degrades_to_no_audio(loop, advance, capsys):
    engine = FakeEngine(fail_resume=True)
    music = AudioLoopScheduler(loop, engine_factory=lambda: engine)
    assert music.start() is False
    assert music.state == "stopped"
    advance(TEMPO_MS * 2)
    assert engine.tones == []
    assert "[WARN]" in capsys.readouterr().out


def test_failed_engine_construction_degrades_to_no_audio(loop):
    def factory():
        raise OSError("no device")
    music = AudioLoopScheduler(loop, engine_factory=factory)
    assert music.start() is False
    assert music.engine is None


def test_close_releases_engine(music, engine):
    music.start()
    music.close()
    assert engine.closed
    assert music.engine is None
