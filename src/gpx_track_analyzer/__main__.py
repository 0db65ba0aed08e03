from gpx_track_analyzer.cli import main

main()
